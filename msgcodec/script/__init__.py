"""
Escape-syntax scripts: `Hey {VII}{:scale 34}big{:reset}`.
"""

from msgcodec.script.parser import ScriptParser, parse_script
from msgcodec.script.serializer import ScriptSerializer, serialize_script

__all__ = [
    "ScriptParser",
    "ScriptSerializer",
    "parse_script",
    "serialize_script",
]
