"""
stateless-codegen
~~~~~~~~~~~~~~~~~

Translate declarative state machine XML into code that builds the machine.

Quick start:
    from stateless_codegen import translate
    print(translate(xml_text, target='python'))
"""

from .codegen import CodeGenerator, translate
from .errors import (
    CodegenError,
    DanglingReferenceError,
    DuplicateNameError,
    InvalidInputError,
    MalformedElementError,
    MissingSectionError,
    ParseError,
)
from .xml_parser import StateDef, StateMachineParser, StateMachineSpec, TransitionDef, extract

__version__ = '0.1.0'

__all__ = [
    "CodeGenerator",
    "translate",
    "extract",
    "StateMachineParser",
    "StateMachineSpec",
    "StateDef",
    "TransitionDef",
    "CodegenError",
    "InvalidInputError",
    "MissingSectionError",
    "MalformedElementError",
    "DuplicateNameError",
    "DanglingReferenceError",
    "ParseError",
]
