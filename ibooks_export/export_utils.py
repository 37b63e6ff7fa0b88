import os
from typing import Optional

APP_NAME = "ibooks-export"
# looked up in the working directory, so it also works once the package is installed
LOCAL_SETTINGS_FILE = ".env"


def get_setting(key: str, default: Optional[str] = None) -> Optional[str]:
    env_setting = os.environ.get(key)
    if env_setting is not None:
        return env_setting
    local_setting = _get_local_setting(key)
    if local_setting is not None:
        return local_setting
    return default


def _get_local_setting(key: str) -> Optional[str]:
    local_settings_path = os.path.join(os.getcwd(), LOCAL_SETTINGS_FILE)
    if not os.path.exists(local_settings_path):
        return None
    with open(local_settings_path, "r") as local_settings_file:
        lines = local_settings_file.readlines()
        for line in lines:
            if line.split("=")[0] == key:
                return line.split("=", 1)[1].strip()
    return None
