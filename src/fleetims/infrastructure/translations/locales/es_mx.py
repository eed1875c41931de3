"""Spanish (Mexico) messages."""

from typing import Any


def _crud(
    noun: str,
    created: str,
    updated: str,
    deleted: str,
) -> dict[str, Any]:
    return {
        "create": {
            "loading": f"Creando {noun}...",
            "success": f"{created} correctamente",
            "error": f"Error al crear {noun}",
        },
        "update": {
            "loading": f"Actualizando {noun}...",
            "success": f"{updated} correctamente",
            "error": f"Error al actualizar {noun}",
        },
        "delete": {
            "loading": f"Eliminando {noun}...",
            "success": f"{deleted} correctamente",
            "error": f"Error al eliminar {noun}",
        },
    }


def _not_found(title: str, description: str) -> dict[str, Any]:
    return {
        "notFound": {"title": title, "description": description},
        "load": "No se pudo cargar la información. Intenta de nuevo.",
    }


MESSAGES: dict[str, dict[str, Any]] = {
    "common": {
        "states": {"loading": "Cargando...", "empty": "Sin resultados"},
        "errors": {"unexpected": "Ocurrió un error inesperado"},
        "actions": {"retry": "Reintentar", "back": "Regresar"},
    },
    "busModels": {
        "messages": _crud(
            "el modelo de autobús",
            "Modelo de autobús creado",
            "Modelo de autobús actualizado",
            "Modelo de autobús eliminado",
        ),
        "errors": _not_found(
            "Modelo de autobús no encontrado",
            "El modelo de autobús que buscas no existe o fue eliminado.",
        ),
        "actions": {"backToList": "Volver a modelos de autobús"},
    },
    "buses": {
        "messages": _crud(
            "el autobús",
            "Autobús creado",
            "Autobús actualizado",
            "Autobús eliminado",
        ),
        "errors": _not_found(
            "Autobús no encontrado",
            "El autobús que buscas no existe o fue eliminado.",
        ),
        "actions": {"backToList": "Volver a autobuses"},
    },
    "drivers": {
        "messages": _crud(
            "el operador",
            "Operador creado",
            "Operador actualizado",
            "Operador eliminado",
        ),
        "errors": _not_found(
            "Operador no encontrado",
            "El operador que buscas no existe o fue eliminado.",
        ),
        "actions": {"backToList": "Volver a operadores"},
    },
    "routes": {
        "messages": _crud(
            "la ruta",
            "Ruta creada",
            "Ruta actualizada",
            "Ruta eliminada",
        ),
        "errors": _not_found(
            "Ruta no encontrada",
            "La ruta que buscas no existe o fue eliminada.",
        ),
        "actions": {"backToList": "Volver a rutas"},
    },
    "terminals": {
        "messages": _crud(
            "la terminal",
            "Terminal creada",
            "Terminal actualizada",
            "Terminal eliminada",
        ),
        "errors": _not_found(
            "Terminal no encontrada",
            "La terminal que buscas no existe o fue eliminada.",
        ),
        "actions": {"backToList": "Volver a terminales"},
    },
    "populations": {
        "messages": _crud(
            "la población",
            "Población creada",
            "Población actualizada",
            "Población eliminada",
        ),
        "errors": _not_found(
            "Población no encontrada",
            "La población que buscas no existe o fue eliminada.",
        ),
        "actions": {"backToList": "Volver a poblaciones"},
    },
    "users": {
        "messages": _crud(
            "el usuario",
            "Usuario creado",
            "Usuario actualizado",
            "Usuario eliminado",
        ),
        "errors": _not_found(
            "Usuario no encontrado",
            "El usuario que buscas no existe o fue eliminado.",
        ),
        "actions": {"backToList": "Volver a usuarios"},
    },
}
