"""
Errors raised while translating state machine XML into code.

InvalidInputError covers input that is absent or well-formed but incomplete.
ParseError covers input that is not well-formed XML at all. The two are kept
apart so callers can tell malformed syntax from a missing section.
"""

from typing import Optional


class CodegenError(Exception):
    """Base class for all translation failures"""


class InvalidInputError(CodegenError, ValueError):
    """Input is absent, empty, or missing required content"""


class MissingSectionError(InvalidInputError):
    """A required top-level section (InitialState, States, Transitions) is missing"""

    def __init__(self, section: str):
        self.section = section
        super().__init__(
            f"The provided xml does not have the required {section} element"
        )


class MalformedElementError(InvalidInputError):
    """A State or Transition element lacks a usable attribute"""

    def __init__(self, element: str, attribute: str, lineno: Optional[int] = None):
        self.element = element
        self.attribute = attribute
        self.lineno = lineno
        location = f" (line {lineno})" if lineno else ""
        super().__init__(
            f"<{element}> element is missing a non-empty '{attribute}' attribute{location}"
        )


class DuplicateNameError(InvalidInputError):
    """A state or transition name is declared more than once (strict mode)"""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"Duplicate {kind} name: '{name}'")


class DanglingReferenceError(InvalidInputError):
    """A reference names a state that is not declared (strict mode)"""

    def __init__(self, referrer: str, name: str):
        self.referrer = referrer
        self.name = name
        super().__init__(f"{referrer} references undeclared state '{name}'")


class ParseError(CodegenError):
    """Input is not well-formed XML"""

    def __init__(self, message: str, lineno: Optional[int] = None,
                 column: Optional[int] = None):
        self.lineno = lineno
        self.column = column
        if lineno is not None:
            message = f"Line {lineno}, column {column}: {message}"
        super().__init__(message)
