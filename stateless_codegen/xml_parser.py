#!/usr/bin/env python3
"""
State Machine XML Parser for Static Code Generation

Parses declarative state machine documents and extracts the model
(initial state, states, transitions) used by the code generator.

Expected document shape:

    <StateMachine>
      <InitialState>State1</InitialState>
      <States>
        <State Name="State1" />
        <State Name="State2" />
      </States>
      <Transitions>
        <Transition Name="Transition1" From="State1" To="State2" />
      </Transitions>
    </StateMachine>
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union

from lxml import etree

from .errors import (
    DanglingReferenceError,
    DuplicateNameError,
    InvalidInputError,
    MalformedElementError,
    MissingSectionError,
    ParseError,
)

logger = logging.getLogger(__name__)

# Required sections, in the order they are checked
INITIAL_STATE = 'InitialState'
STATES = 'States'
TRANSITIONS = 'Transitions'

DEFAULT_MACHINE_NAME = 'StateMachine'


def _localname(elem) -> str:
    """Tag name without namespace"""
    return etree.QName(elem).localname


def _find_descendant(root, tag: str):
    """First element (root included) whose local name is tag, in document order"""
    for elem in root.iter(etree.Element):
        if _localname(elem) == tag:
            return elem
    return None


def _child_elements(elem) -> Iterator:
    """Immediate children that are elements (skips comments and PIs)"""
    return (child for child in elem if isinstance(child.tag, str))


@dataclass(frozen=True)
class StateDef:
    """A declared state"""
    name: str


@dataclass(frozen=True)
class TransitionDef:
    """A named transition from one state to another"""
    name: str
    source: str  # From attribute
    target: str  # To attribute


@dataclass(frozen=True)
class StateMachineSpec:
    """Parsed state machine model for code generation"""
    initial_state: str
    states: Tuple[StateDef, ...] = ()
    transitions: Tuple[TransitionDef, ...] = ()
    name: str = DEFAULT_MACHINE_NAME

    def transitions_from(self, state_name: str) -> Tuple[TransitionDef, ...]:
        """Transitions leaving state_name, in document order"""
        return tuple(t for t in self.transitions if t.source == state_name)


class StateMachineParser:
    """
    State machine XML parser for static code generation

    Extracts the initial state, states and transitions from a document.
    With strict=True the extracted model is also checked for duplicate
    names and references to undeclared states.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        # bytes honour the document's encoding declaration
        self._xml_parser = self._make_xml_parser()
        # str input is re-encoded as UTF-8, so the declaration must be ignored
        self._text_parser = self._make_xml_parser(encoding='utf-8')

    @staticmethod
    def _make_xml_parser(encoding: Optional[str] = None):
        return etree.XMLParser(
            encoding=encoding,
            resolve_entities=False,
            no_network=True,
            remove_blank_text=True,
        )

    def parse_file(self, xml_path: Union[str, Path]) -> StateMachineSpec:
        """
        Parse state machine XML file and return model

        Args:
            xml_path: Path to XML file

        Returns:
            StateMachineSpec named after the file stem
        """
        path = Path(xml_path)
        return self.parse_string(path.read_bytes(), name=path.stem)

    def parse_string(self, xml: Optional[Union[str, bytes]],
                     name: str = DEFAULT_MACHINE_NAME) -> StateMachineSpec:
        """
        Parse state machine XML text and return model

        Raises:
            InvalidInputError: input is absent/empty or a section is missing
            ParseError: input is not well-formed XML
        """
        if xml is None or not xml.strip():
            raise InvalidInputError("The provided xml is null, or empty")

        # lxml rejects str input that carries an encoding declaration
        if isinstance(xml, str):
            data, xml_parser = xml.encode('utf-8'), self._text_parser
        else:
            data, xml_parser = xml, self._xml_parser

        try:
            root = etree.fromstring(data, xml_parser)
        except etree.XMLSyntaxError as e:
            lineno, column = e.position if e.position else (e.lineno, None)
            raise ParseError(e.msg or str(e), lineno, column) from e

        initial_elem = _find_descendant(root, INITIAL_STATE)
        states_elem = _find_descendant(root, STATES)
        transitions_elem = _find_descendant(root, TRANSITIONS)

        # Full text content: comments and child elements may split the text
        initial_state = initial_elem.xpath('string()').strip() if initial_elem is not None else ''
        if not initial_state:
            raise MissingSectionError(INITIAL_STATE)
        if states_elem is None:
            raise MissingSectionError(STATES)
        if transitions_elem is None:
            raise MissingSectionError(TRANSITIONS)

        spec = StateMachineSpec(
            initial_state=initial_state,
            states=tuple(self._parse_state(e) for e in _child_elements(states_elem)),
            transitions=tuple(self._parse_transition(e) for e in _child_elements(transitions_elem)),
            name=name,
        )

        logger.debug("Extracted %s: initial=%r, %d states, %d transitions",
                     spec.name, spec.initial_state, len(spec.states), len(spec.transitions))

        if self.strict:
            self._validate_references(spec)

        return spec

    def _parse_state(self, elem) -> StateDef:
        return StateDef(name=self._required_attribute(elem, 'Name'))

    def _parse_transition(self, elem) -> TransitionDef:
        return TransitionDef(
            name=self._required_attribute(elem, 'Name'),
            source=self._required_attribute(elem, 'From'),
            target=self._required_attribute(elem, 'To'),
        )

    def _required_attribute(self, elem, attribute: str) -> str:
        value = elem.get(attribute)
        if not value:
            raise MalformedElementError(_localname(elem), attribute, elem.sourceline)
        return value

    def _validate_references(self, spec: StateMachineSpec):
        """
        Reject duplicate names and references to undeclared states

        Transition names only need to be unique per source state, since the
        same trigger may legitimately leave several states.
        """
        declared = set()
        for state in spec.states:
            if state.name in declared:
                raise DuplicateNameError('state', state.name)
            declared.add(state.name)

        if spec.initial_state not in declared:
            raise DanglingReferenceError('InitialState', spec.initial_state)

        seen_triggers = set()
        for transition in spec.transitions:
            key = (transition.name, transition.source)
            if key in seen_triggers:
                raise DuplicateNameError('transition', transition.name)
            seen_triggers.add(key)

            if transition.source not in declared:
                raise DanglingReferenceError(f"Transition '{transition.name}' From", transition.source)
            if transition.target not in declared:
                raise DanglingReferenceError(f"Transition '{transition.name}' To", transition.target)


def extract(xml: Optional[Union[str, bytes]], strict: bool = False) -> StateMachineSpec:
    """Parse XML text into a StateMachineSpec"""
    return StateMachineParser(strict=strict).parse_string(xml)


if __name__ == '__main__':
    import sys

    if len(sys.argv) < 2:
        print("Usage: python -m stateless_codegen.xml_parser <xml_file>")
        sys.exit(1)

    parser = StateMachineParser()
    model = parser.parse_file(sys.argv[1])

    print(f"Model: {model.name}")
    print(f"Initial: {model.initial_state}")
    print(f"States: {len(model.states)}")
    print(f"Transitions: {len(model.transitions)}")
