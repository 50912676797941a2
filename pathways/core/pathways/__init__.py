from core.pathways.manager import PathwaysManager
from core.pathways.models import SaveFileInfo
from core.pathways.pathway import Pathway
from core.pathways.scheduler import AutoSaveScheduler
from core.pathways.slots import next_auto_save_slot, parse_slot_number

__all__ = [
    "AutoSaveScheduler",
    "Pathway",
    "PathwaysManager",
    "SaveFileInfo",
    "next_auto_save_slot",
    "parse_slot_number",
]
