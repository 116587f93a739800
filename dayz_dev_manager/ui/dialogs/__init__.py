# Dialog components
from dayz_dev_manager.ui.dialogs.list_picker_dialog import ListPickerDialog
from dayz_dev_manager.ui.dialogs.load_order_dialog import LoadOrderDialog
from dayz_dev_manager.ui.dialogs.settings_dialog import SettingsDialog

__all__ = [
    "ListPickerDialog",
    "LoadOrderDialog",
    "SettingsDialog",
]
