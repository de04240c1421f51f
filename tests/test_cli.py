"""
Tests for the command-line interface.
"""

from wadutils import parse_wad
from wadutils.cli import main


def test_list(tmp_path, capsys, build_wad):
    wad = tmp_path / "x.wad"
    wad.write_bytes(build_wad(b"IWAD", [("A?", b"abc"), ("M", None)]))

    assert main(["list", str(wad)]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out[0] == "IWAD"
    name, safe_name, offset, length, digest = out[1].split(";")
    assert (name, safe_name, offset, length) == ("A?", "A_", "12", "3")
    assert len(digest) == 40
    assert out[2].startswith("M;M;0;0;")


def test_export_and_assemble(tmp_path, sample_wad):
    wad = tmp_path / "sample.wad"
    wad.write_bytes(sample_wad)
    outdir = tmp_path / "expanded"
    rebuilt = tmp_path / "rebuilt.wad"

    assert main(["export", str(wad), str(outdir), "-f"]) == 0
    assert (outdir / "!INDEX.TXT").exists()
    assert main(["assemble", str(outdir), str(rebuilt), "-f"]) == 0

    names = [e.name for e in parse_wad(rebuilt.read_bytes()).entries]
    assert names == [e.name for e in parse_wad(sample_wad).entries]


def test_default_output_paths(tmp_path, sample_wad):
    wad = tmp_path / "sample.wad"
    wad.write_bytes(sample_wad)

    assert main(["export", str(wad), "--no-media"]) == 0
    assert (tmp_path / "sample" / "!INDEX.TXT").exists()
    assert not (tmp_path / "sample" / "MEDIA").exists()

    wad.unlink()
    assert main(["assemble", str(tmp_path / "sample")]) == 0
    assert wad.exists()


def test_convert(tmp_path, capsys, make_mus):
    lump = tmp_path / "D_RUNNIN.lmp"
    lump.write_bytes(make_mus(b"\x10\x3c\x60"))

    assert main(["convert", str(lump)]) == 0

    assert (tmp_path / "D_RUNNIN.lmp.MID").read_bytes().startswith(b"MThd")
    assert "MUS" in capsys.readouterr().out


def test_errors_go_to_stderr(tmp_path, capsys):
    assert main(["list", str(tmp_path / "missing.wad")]) == 1
    assert capsys.readouterr().err.startswith("Error:")

    bad = tmp_path / "bad.wad"
    bad.write_bytes(b"JUNK" + bytes(8))
    assert main(["list", str(bad)]) == 1
    assert "Unrecognized header" in capsys.readouterr().err


def test_convert_failure(tmp_path, capsys):
    lump = tmp_path / "junk.lmp"
    lump.write_bytes(b"xyz")
    assert main(["convert", str(lump)]) == 1
    assert "Error:" in capsys.readouterr().err


def test_overwrite_is_confirmed(tmp_path, monkeypatch, sample_wad):
    wad = tmp_path / "sample.wad"
    wad.write_bytes(sample_wad)
    outdir = tmp_path / "existing"
    outdir.mkdir()

    monkeypatch.setattr("builtins.input", lambda prompt: "n")
    assert main(["export", str(wad), str(outdir)]) == 0
    assert not (outdir / "!INDEX.TXT").exists()

    monkeypatch.setattr("builtins.input", lambda prompt: "y")
    assert main(["export", str(wad), str(outdir)]) == 0
    assert (outdir / "!INDEX.TXT").exists()


def test_missing_inputs_report_on_stderr(tmp_path, capsys):
    assert main(["assemble", str(tmp_path / "nowhere"), "-f"]) == 1
    captured = capsys.readouterr()
    assert captured.err.startswith("Error: Directory not found")
    assert "Error" not in captured.out

    assert main(["export", str(tmp_path / "missing.wad"), str(tmp_path / "out"), "-f"]) == 1
    captured = capsys.readouterr()
    assert captured.err.startswith("Error:")
    assert "Error" not in captured.out
