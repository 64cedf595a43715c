from .config import Config, cfg
from .main import run_report
from .sources import Snapshot, load_snapshot

__all__ = ["Config", "cfg", "Snapshot", "load_snapshot", "run_report"]
