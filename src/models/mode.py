from enum import Enum


class Mode(Enum):
    TEST = "test"
    LIVE = "live"

    @classmethod
    def from_testmode(cls, testmode: bool) -> "Mode":
        return cls.TEST if testmode else cls.LIVE
