#!/usr/bin/env python3
"""
State Machine Static Code Generator (Python + Jinja2)

Generates state machine construction code from declarative XML files.
Each state becomes a configure block permitting its outgoing transitions;
the surrounding boilerplate comes from a per-target Jinja2 template.
"""

import sys
import logging
import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from jinja2 import Environment, FileSystemLoader

from .errors import CodegenError
from .target_config import DEFAULT_TARGET, available_targets, get_generated_banner, get_target
from .xml_parser import StateDef, StateMachineParser, StateMachineSpec, TransitionDef

logger = logging.getLogger(__name__)

STRING_LITERAL_ESCAPES = str.maketrans({
    '\\': '\\\\',
    '"': '\\"',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
})


@dataclass(frozen=True)
class StateBlock:
    """One configure block: a state and the transitions it permits"""
    state: StateDef
    transitions: Tuple[TransitionDef, ...]


class CodeGenerator:
    """
    Static code generator for declarative state machines

    Uses Jinja2 templates to render parsed models into source code for
    the selected target (see target_config.py).
    """

    def __init__(self, template_dir=None, target: str = DEFAULT_TARGET,
                 namespace: Optional[str] = None, class_name: Optional[str] = None,
                 interface: Optional[str] = None, factory: Optional[str] = None,
                 escape: bool = False, strict: bool = False):
        if template_dir is None:
            template_dir = Path(__file__).parent / 'templates'

        self.target = target
        self.target_info = get_target(target)
        self.escape = escape
        self.strict = strict

        # Explicit options override the target's naming defaults
        defaults = self.target_info['defaults']
        self.names = {
            'namespace': namespace if namespace is not None else defaults['namespace'],
            'class_name': class_name if class_name is not None else defaults['class_name'],
            'interface': interface if interface is not None else defaults['interface'],
            'factory': factory if factory is not None else defaults['factory'],
        }

        # Setup Jinja2 environment
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=False,  # output is source code, not markup
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True
        )

        # Add custom filter
        self.env.filters['quote'] = self._quote

    def _quote(self, name):
        """Wrap an identifier in double quotes, escaping only when enabled"""
        if self.escape:
            name = self._escape_string_literal(name)
        return f'"{name}"'

    def _escape_string_literal(self, text):
        """
        Escape identifier text for a double-quoted literal

        Inside a regular double-quoted string, C# and Python both end the
        literal at an unescaped quote and reject a raw line break. Both
        read backslash, quote, \\n, \\r and \\t escapes the same way, so one
        table serves every target.
        """
        return text.translate(STRING_LITERAL_ESCAPES)

    def _build_blocks(self, model: StateMachineSpec) -> List[StateBlock]:
        """
        Pair each state with its outgoing transitions

        Scans the transition list once per state; both orders follow the
        document.
        """
        return [
            StateBlock(state=state, transitions=model.transitions_from(state.name))
            for state in model.states
        ]

    def emit(self, model: StateMachineSpec) -> str:
        """
        Render a parsed model into source code

        Args:
            model: Parsed state machine

        Returns:
            Complete generated source text
        """
        template = self.env.get_template(self.target_info['template'])
        output = template.render(
            model=model,
            blocks=self._build_blocks(model),
            banner=get_generated_banner(self.target),
            **self.names
        )
        logger.debug("Rendered %s with %s: %d characters",
                     model.name, self.target_info['template'], len(output))
        return output

    def translate(self, xml) -> str:
        """Parse XML text and render it; raises on invalid input"""
        model = StateMachineParser(strict=self.strict).parse_string(xml)
        return self.emit(model)

    def output_path(self, xml_path, output_dir) -> Path:
        """Generated file path: <input stem>_sm.<target suffix>"""
        return Path(output_dir) / f"{Path(xml_path).stem}_sm.{self.target_info['suffix']}"

    def generate(self, xml_path: str, output_dir: str) -> bool:
        """
        Generate code from state machine XML file

        Args:
            xml_path: Path to XML input file
            output_dir: Directory for generated file

        Returns:
            True if generation succeeded, False otherwise
        """
        try:
            parser = StateMachineParser(strict=self.strict)
            model = parser.parse_file(xml_path)

            print(f"Generating {self.target} code for: {model.name}")
            print(f"  Initial state: {model.initial_state}")
            print(f"  States: {len(model.states)}")
            print(f"  Transitions: {len(model.transitions)}")

            output = self.emit(model)

            output_path = self.output_path(xml_path, output_dir)
            output_path.parent.mkdir(parents=True, exist_ok=True)

            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(output)

            print(f"  ✓ Generated: {output_path}")
            return True

        except (CodegenError, OSError) as e:
            print(f"Error generating code: {e}", file=sys.stderr)
            logger.debug("Generation failed for %s", xml_path, exc_info=True)
            return False


def translate(xml, **options) -> str:
    """Translate state machine XML into source code (see CodeGenerator for options)"""
    return CodeGenerator(**options).translate(xml)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='stateless-codegen',
        description='Generate state machine construction code from declarative XML files'
    )
    parser.add_argument('xml_file', help='Input state machine XML file')
    parser.add_argument('-o', '--output-dir', default='.',
                        help='Output directory for generated files')
    parser.add_argument('-t', '--target', default=DEFAULT_TARGET, choices=available_targets(),
                        help=f'Output target (default: {DEFAULT_TARGET})')
    parser.add_argument('-T', '--template-dir', default=None,
                        help='Template directory (default: bundled templates)')
    parser.add_argument('--namespace', default=None,
                        help='Namespace of the generated class (csharp)')
    parser.add_argument('--class-name', default=None,
                        help='Name of the generated factory class (csharp)')
    parser.add_argument('--interface', default=None,
                        help='Interface implemented by the generated class, empty for none (csharp)')
    parser.add_argument('--factory', default=None,
                        help='Name of the generated factory method or function')
    parser.add_argument('--escape', action='store_true',
                        help='Escape quotes and control characters in identifiers')
    parser.add_argument('--strict', action='store_true',
                        help='Reject duplicate names and references to undeclared states')
    parser.add_argument('--stdout', action='store_true',
                        help='Write generated code to stdout instead of a file')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    # Check input file exists
    if not Path(args.xml_file).exists():
        print(f"Error: XML file not found: {args.xml_file}", file=sys.stderr)
        return 1

    generator = CodeGenerator(
        template_dir=args.template_dir,
        target=args.target,
        namespace=args.namespace,
        class_name=args.class_name,
        interface=args.interface,
        factory=args.factory,
        escape=args.escape,
        strict=args.strict,
    )

    if args.stdout:
        try:
            model = StateMachineParser(strict=args.strict).parse_file(args.xml_file)
            sys.stdout.write(generator.emit(model))
        except (CodegenError, OSError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        return 0

    # Generate code
    success = generator.generate(args.xml_file, args.output_dir)

    return 0 if success else 1


if __name__ == '__main__':
    sys.exit(main())
