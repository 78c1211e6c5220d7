from .station import Station
from .division import Division
from .membership import Membership, UserRole, ROLE_HIERARCHY
from .person import Person
from .schedule_cycle import ScheduleCycle
from .shift_template import ShiftTemplate
from .shift import Shift, ShiftStatus, ShiftLabel
from .assignment import Assignment

__all__ = [
    "Station",
    "Division",
    "Membership",
    "UserRole",
    "ROLE_HIERARCHY",
    "Person",
    "ScheduleCycle",
    "ShiftTemplate",
    "Shift",
    "ShiftStatus",
    "ShiftLabel",
    "Assignment",
]
