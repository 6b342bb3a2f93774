"""
Pytest configuration: shared state machine XML documents.
"""

import pytest


INITIAL_ONLY_XML = (
    '<?xml version="1.0" encoding="utf-8"?>     <StateMachine>  '
    '<InitialState>InitState</InitialState><States /><Transitions /></StateMachine>'
)

TWO_STATES_XML = """<?xml version="1.0" encoding="utf-8"?>
<StateMachine>
  <InitialState>State1</InitialState>
  <States>
    <State Name="State1" />
    <State Name="State2" />
  </States >
  <Transitions>
    <Transition Name="Transition1" From="State1" To="State2" />
    <Transition Name = "Transition2" From = "State2" To = "State1" />
  </Transitions>
</StateMachine>"""

# Door: transitions listed out of state order, one state with two exits
DOOR_XML = """<?xml version="1.0" encoding="utf-8"?>
<StateMachine>
  <InitialState>Closed</InitialState>
  <States>
    <!-- document order matters -->
    <State Name="Open" />
    <State Name="Closed" />
    <State Name="Locked" />
  </States>
  <Transitions>
    <Transition Name="Close" From="Open" To="Closed" />
    <Transition Name="Open" From="Closed" To="Open" />
    <Transition Name="Unlock" From="Locked" To="Closed" />
    <Transition Name="Lock" From="Closed" To="Locked" />
  </Transitions>
</StateMachine>"""


@pytest.fixture
def initial_only_xml():
    return INITIAL_ONLY_XML


@pytest.fixture
def two_states_xml():
    return TWO_STATES_XML


@pytest.fixture
def door_xml():
    return DOOR_XML


@pytest.fixture
def xml_file(tmp_path):
    """Write an XML document to a temporary file and return its path"""
    def _write(content, name='door.xml'):
        path = tmp_path / name
        path.write_text(content, encoding='utf-8')
        return path
    return _write
