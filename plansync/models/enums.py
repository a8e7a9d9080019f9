import enum


class SellModeEnum(enum.Enum):
    ONLINE = "online"
    OFFLINE = "offline"


class SyncState(enum.Enum):
    IDLE = "idle"
    SYNCING = "syncing"
