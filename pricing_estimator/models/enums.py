from enum import Enum

class ServiceId(str, Enum):
    SALARY = "salary"
    BOOKKEEPING = "bookkeeping"
    ANNUAL_REPORTS = "annual-reports"

class ImpactType(str, Enum):
    MULTIPLIER = "multiplier"
    FIXED = "fixed"

class VariableType(str, Enum):
    NUMBER = "number"
    CURRENCY = "currency"
    TEXT = "text"

class ImpactFormula(str, Enum):
    LINEAR = "linear"
    THRESHOLD = "threshold"
    PERCENTAGE = "percentage"

class FieldState(str, Enum):
    IDLE = "IDLE"
    PENDING_COMMIT = "PENDING_COMMIT"
    DISPOSED = "DISPOSED"
