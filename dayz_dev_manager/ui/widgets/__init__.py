# Reusable widgets
from dayz_dev_manager.ui.widgets.path_selector import PathSelector

__all__ = ["PathSelector"]
