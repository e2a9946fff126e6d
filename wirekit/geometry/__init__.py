from .wire import (
    Location,
    Segment,
    WireError,
)
