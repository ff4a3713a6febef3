from enum import Enum


class Subject(str, Enum):
    MATH = "matematyka"
    PHYSICS = "fizyka"
    COMPUTER_SCIENCE = "informatyka"


class HomeworkStatus(str, Enum):
    NONE = "brak"
    ASSIGNED = "zadane"
    SUBMITTED = "oddane"
    NEEDS_REVISION = "poprawa"


class PaymentStatus(str, Enum):
    PENDING = "oczekuje"
    PAID = "zapłacone"
    OVERDUE = "zaległe"
    CANCELLED = "anulowane"


class OwnerType(str, Enum):
    STUDENT = "student"
    CLASS = "class"
    BOOK = "book"
    DIAGNOSTIC = "diagnostic"


class LinkKind(str, Enum):
    RESOURCE = "resource"
    HOMEWORK = "homework"
    REFERENCE = "reference"
    EXTERNAL = "external"
