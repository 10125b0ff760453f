"""Personal Training Manager: athletes, routines, injury insurance claims and statistics."""

__version__ = "2.0.0"
