APP_ORG = "Attention"
APP_NAME = "Attention"
APP_DIR_NAME = "Attention"

HISTORY_FILE = "sessions.json"
