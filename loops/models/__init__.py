from loops.models.save_model import SaveSlot
