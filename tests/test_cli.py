"""Tests for the command-line front end and file generation."""

import pytest

from stateless_codegen.codegen import CodeGenerator, main
from stateless_codegen.target_config import (
    TARGET_CONFIG,
    available_targets,
    get_generated_banner,
    get_target,
)


class TestGenerate:
    """CodeGenerator.generate writes <stem>_sm.<suffix> files."""

    def test_writes_csharp_file(self, tmp_path, xml_file, door_xml, capsys):
        out_dir = tmp_path / "out"
        assert CodeGenerator().generate(str(xml_file(door_xml)), str(out_dir))

        generated = out_dir / "door_sm.cs"
        assert generated.exists()
        assert 'sm.Configure("Locked")' in generated.read_text(encoding="utf-8")

        stdout = capsys.readouterr().out
        assert "Generating csharp code for: door" in stdout
        assert "States: 3" in stdout
        assert "Transitions: 4" in stdout

    def test_writes_python_file(self, tmp_path, xml_file, door_xml):
        generator = CodeGenerator(target="python")
        assert generator.generate(str(xml_file(door_xml)), str(tmp_path))
        assert (tmp_path / "door_sm.py").exists()

    def test_invalid_input_returns_false(self, tmp_path, xml_file, capsys):
        path = xml_file("<StateMachine><States /><Transitions /></StateMachine>")
        assert not CodeGenerator().generate(str(path), str(tmp_path / "out"))
        assert not (tmp_path / "out").exists()
        assert "InitialState" in capsys.readouterr().err

    def test_malformed_input_returns_false(self, tmp_path, xml_file, capsys):
        assert not CodeGenerator().generate(str(xml_file("<>")), str(tmp_path))
        assert "Error generating code" in capsys.readouterr().err


class TestMain:
    """Argument handling and exit status."""

    def test_success(self, tmp_path, xml_file, two_states_xml):
        path = xml_file(two_states_xml, "toggle.xml")
        assert main([str(path), "-o", str(tmp_path)]) == 0
        assert (tmp_path / "toggle_sm.cs").exists()

    def test_python_target(self, tmp_path, xml_file, two_states_xml):
        path = xml_file(two_states_xml, "toggle.xml")
        assert main([str(path), "-o", str(tmp_path), "-t", "python"]) == 0
        assert (tmp_path / "toggle_sm.py").exists()

    def test_stdout(self, xml_file, two_states_xml, capsys):
        path = xml_file(two_states_xml)
        assert main([str(path), "--stdout", "--namespace", "Toggles"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("// Generated by stateless-codegen.")
        assert "namespace Toggles" in out

    def test_stdout_error(self, xml_file, capsys):
        assert main([str(xml_file("<>")), "--stdout"]) == 1
        assert capsys.readouterr().err.startswith("Error: ")

    def test_strict(self, tmp_path, xml_file, initial_only_xml, capsys):
        path = xml_file(initial_only_xml)
        assert main([str(path), "-o", str(tmp_path)]) == 0
        assert main([str(path), "-o", str(tmp_path), "--strict"]) == 1
        assert "undeclared state 'InitState'" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "absent.xml")]) == 1
        assert "XML file not found" in capsys.readouterr().err

    def test_unknown_target(self, xml_file, door_xml):
        with pytest.raises(SystemExit) as excinfo:
            main([str(xml_file(door_xml)), "-t", "cobol"])
        assert excinfo.value.code == 2


class TestTargetConfig:
    """Target table lookups."""

    def test_available_targets(self):
        assert available_targets() == ["csharp", "python"]

    @pytest.mark.parametrize("name", sorted(TARGET_CONFIG))
    def test_entries_are_complete(self, name):
        info = get_target(name)
        assert {"template", "suffix", "runtime", "comment_prefix", "defaults"} <= set(info)
        assert set(info["defaults"]) == {"namespace", "class_name", "interface", "factory"}

    def test_unknown_target(self):
        with pytest.raises(ValueError):
            get_target("cobol")

    def test_banner(self):
        assert get_generated_banner("csharp") == "// Generated by stateless-codegen. Do not edit."
        assert get_generated_banner("python") == "# Generated by stateless-codegen. Do not edit."
