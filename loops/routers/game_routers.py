# import moduls/libraries
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, Response
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID


# import form project
from loops.core.database import get_db
from loops.schemas import ClickRequest, ClickResponse, CustomLevelRequest, GameRead, RetryRequest, TileSetUpdate
from loops.services import GameServices
from loops.visualization.level_visualization import generate_level_visualization


router = APIRouter()


# Start a new game
@router.post("/", response_model=GameRead, status_code=201)
async def create_game(db: Session = Depends(get_db)):
    """Create a save slot at level 1"""
    services = GameServices(db)
    slot = services.create_game()
    return services.read_game(slot)


# Get game by id
@router.get("/{game_id}", response_model=GameRead)
async def get_game(game_id: UUID, db: Session = Depends(get_db)):
    """Fetch progress and the current level"""
    services = GameServices(db)
    slot = services.get_game(game_id)
    return services.read_game(slot)


# Click a tile
@router.post("/{game_id}/click", response_model=ClickResponse)
async def click(game_id: UUID, click_request: ClickRequest, db: Session = Depends(get_db)):
    """Rotate the clicked tile one step, if it may turn"""
    services = GameServices(db)
    if click_request.tile_index is not None:
        result = services.click_index(game_id, click_request.tile_index)
    else:
        result = services.click_point(game_id, click_request.display_x, click_request.display_y)
    return ClickResponse(
        accepted=result.accepted,
        tile_index=result.tile_index,
        frozen_tile=result.frozen_tile,
        game=services.read_game(result.slot, result.level),
    )


# Retry current level
@router.post("/{game_id}/retry", response_model=GameRead)
async def retry(game_id: UUID, retry_request: Optional[RetryRequest] = None, db: Session = Depends(get_db)):
    """Generate the current level again (shuffle_tiles=false hands out the solved board)"""
    services = GameServices(db)
    shuffle_tiles = retry_request.shuffle_tiles if retry_request else True
    slot, level = services.load_new_level(game_id, shuffle_tiles=shuffle_tiles)
    return services.read_game(slot, level)


# Next level
@router.post("/{game_id}/advance", response_model=GameRead)
async def advance(game_id: UUID, db: Session = Depends(get_db)):
    """Move on to the next level"""
    services = GameServices(db)
    slot, level = services.advance(game_id)
    return services.read_game(slot, level)


# Level select
@router.post("/{game_id}/levels/{level_number}", response_model=GameRead)
async def go_to_level(game_id: UUID, level_number: int, db: Session = Depends(get_db)):
    """Jump to an unlocked level"""
    services = GameServices(db)
    slot, level = services.go_to_level(game_id, level_number)
    return services.read_game(slot, level)


# Custom level
@router.post("/{game_id}/custom", response_model=GameRead)
async def custom_level(game_id: UUID, custom_request: CustomLevelRequest, db: Session = Depends(get_db)):
    """Play a level with custom settings"""
    services = GameServices(db)
    slot, level = services.set_custom_level(game_id, custom_request)
    return services.read_game(slot, level)


# Reset progress
@router.post("/{game_id}/reset", response_model=GameRead)
async def reset(game_id: UUID, db: Session = Depends(get_db)):
    """Start back at level 1"""
    services = GameServices(db)
    slot, level = services.reset_progress(game_id)
    return services.read_game(slot, level)


@router.put("/{game_id}/tile-set", response_model=GameRead)
async def set_tile_set(game_id: UUID, update: TileSetUpdate, db: Session = Depends(get_db)):
    """Store the chosen skin"""
    services = GameServices(db)
    slot = services.set_tile_set(game_id, update.tile_set)
    return services.read_game(slot)


# Preview of the current level
@router.get("/{game_id}/preview", response_class=HTMLResponse)
async def preview(game_id: UUID, db: Session = Depends(get_db)):
    """Plotly preview of the current level"""
    services = GameServices(db)
    slot = services.get_game(game_id)
    fig = generate_level_visualization(services.get_level(slot))
    return HTMLResponse(content=fig.to_html(full_html=True, include_plotlyjs="cdn"))


# API Delete Request
@router.delete("/{game_id}", status_code=204)
async def delete_game(game_id: UUID, db: Session = Depends(get_db)):
    """Delete a save slot"""
    services = GameServices(db)
    services.delete_game(game_id)
    return Response(status_code=204)
