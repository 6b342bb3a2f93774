"""
Output Target Configuration - Single Source of Truth

Every language/runtime pair the generator can emit is described here.
Add a target by adding an entry and a template in templates/.

Usage:
    from stateless_codegen.target_config import get_target
    print(get_target('csharp')['suffix'])
"""

TARGET_CONFIG = {
    # C# against the Stateless library
    'csharp': {
        'template': 'csharp_factory.jinja2',
        'suffix': 'cs',
        'runtime': 'Stateless (https://github.com/dotnet-state-machine/stateless)',
        'description': 'C# factory class building a StateMachine<string, string>',
        'comment_prefix': '//',
        'defaults': {
            'namespace': 'GeneratedNamespace',
            'class_name': 'StatemachineFactory',
            'interface': 'IStateMachineFactory',
            'factory': 'Configure',
        },
    },

    # Python against the transitions library
    'python': {
        'template': 'python_factory.jinja2',
        'suffix': 'py',
        'runtime': 'transitions (https://github.com/pytransitions/transitions)',
        'description': 'Python module with a factory function building a transitions.Machine',
        'comment_prefix': '#',
        'defaults': {
            'namespace': '',
            'class_name': '',
            'interface': '',
            'factory': 'configure',
        },
    },
}

DEFAULT_TARGET = 'csharp'

GENERATED_BANNER = 'Generated by stateless-codegen. Do not edit.'


def available_targets():
    """Names of all configured targets"""
    return sorted(TARGET_CONFIG)


def get_target(name):
    """Get the configuration entry for a target"""
    if name not in TARGET_CONFIG:
        raise ValueError(
            f"Unknown target: {name} (available: {', '.join(available_targets())})"
        )
    return TARGET_CONFIG[name]


def get_generated_banner(name):
    """
    Get the one-line banner placed at the top of generated files.

    Contains no timestamp or path so repeated runs produce identical output.
    """
    return f"{get_target(name)['comment_prefix']} {GENERATED_BANNER}"


if __name__ == '__main__':
    print("=== Code Generator Targets ===\n")
    for target in available_targets():
        info = TARGET_CONFIG[target]
        print(f"{target}: {info['description']}")
        print(f"  Runtime: {info['runtime']}")
        print(f"  Output:  *.{info['suffix']}")
