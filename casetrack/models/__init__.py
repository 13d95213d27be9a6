# casetrack/models/__init__.py
from .tenant import Tenant
from .role import Role
from .user import User
from .lawyer import Lawyer
from .creditor import Creditor
from .province import Province
from .maestro import Maestro
from .judicial_process import JudicialProcess
from .document import Document
from .activity import Activity
from .event import Event

__all__ = [
    "Tenant",
    "Role",
    "User",
    "Lawyer",
    "Creditor",
    "Province",
    "Maestro",
    "JudicialProcess",
    "Document",
    "Activity",
    "Event",
]
