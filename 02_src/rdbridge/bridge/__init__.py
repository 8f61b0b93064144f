"""Scripting bridge."""

from .scripting import IScriptingBridge, ScriptingBridge, read_envelope, remove_if_exists, write_script_file

__all__ = [
    "IScriptingBridge",
    "ScriptingBridge",
    "read_envelope",
    "remove_if_exists",
    "write_script_file",
]
