"""Collaborator interfaces."""

from statewait.core.interfaces.emitter import EmitterInterface, StatefulEmitterInterface

__all__ = ["EmitterInterface", "StatefulEmitterInterface"]
