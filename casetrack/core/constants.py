# casetrack/core/constants.py
from enum import Enum


class TenantStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


# Lawyers, creditors and users share the tenant lifecycle vocabulary
RecordStatus = TenantStatus


class LawyerType(Enum):
    INTERNAL = "internal"
    EXTERNAL = "external"


class ProcessStatus(Enum):
    ACTIVO = "activo"
    INACTIVO = "inactivo"
    SUSPENDIDO = "suspendido"


class MaestroStatus(Enum):
    ACTIVO = "activo"
    INACTIVO = "inactivo"


class DocumentStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DELETED = "deleted"


class ActivityType(Enum):
    AUDIENCIA = "audiencia"
    DILIGENCIA = "diligencia"
    PRESENTACION = "presentacion"
    NOTIFICACION = "notificacion"
    REUNION = "reunion"
    OTRO = "otro"


class Priority(Enum):
    BAJA = "baja"
    MEDIA = "media"
    ALTA = "alta"
    URGENTE = "urgente"


class ActivityStatus(Enum):
    PENDIENTE = "pendiente"
    EN_PROGRESO = "en_progreso"
    COMPLETADA = "completada"
    CANCELADA = "cancelada"


class DefaultRole(Enum):
    ADMIN = "admin"
    ABOGADO = "abogado"
    ASISTENTE = "asistente"


DEFAULT_ROLE_DESCRIPTIONS = {
    DefaultRole.ADMIN: "System administrator",
    DefaultRole.ABOGADO: "Lawyer",
    DefaultRole.ASISTENTE: "Legal assistant",
}


class UserEvent(Enum):
    """Routing keys published on the user lifecycle exchange"""

    CREATED = "usuario.creado"
    UPDATED = "usuario.actualizado"
    DELETED = "usuario.eliminado"


USER_EVENTS_QUEUE = "usuarios_queue"
USER_EVENTS_BINDING = "usuario.*"
MESSAGE_LOG_CAPACITY = 100


def values(enum_cls):
    """List the raw values of an Enum, for OneOf validators"""
    return [member.value for member in enum_cls]
