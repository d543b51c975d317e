import json

import pytest

try:
    import swimdsl as sd
except Exception as e:  # pragma: no cover
    pytest.skip(f"swimdsl unavailable: {e}", allow_module_level=True)


def run(argv):
    with pytest.raises(SystemExit) as exc:
        sd.main(argv)
    return exc.value.code


def test_validate_constraints_ok():
    c = sd.validate_constraints({"poolLengthMeters": 50.0, "focus": "aerobic", "profile": "elite",
                                 "targetDistanceMeters": 4000, "title": "Long course"})
    assert c.pool_length_meters == 50
    assert c.focus is sd.Focus.AEROBIC and c.profile is sd.Profile.ELITE
    assert c.target_distance_meters == 4000
    assert c.target_duration_minutes is None


@pytest.mark.parametrize("patch,field", [
    ({"poolLengthMeters": 0}, "poolLengthMeters"),
    ({"poolLengthMeters": "25"}, "poolLengthMeters"),
    ({"poolLengthMeters": True}, "poolLengthMeters"),
    ({"focus": "distance"}, "focus"),
    ({"profile": "masters"}, "profile"),
    ({"targetDistanceMeters": -100}, "targetDistanceMeters"),
    ({"targetDurationMinutes": 0}, "targetDurationMinutes"),
])
def test_validate_constraints_rejects(patch, field):
    data = {"poolLengthMeters": 25, "focus": "sprint", "profile": "novice"}
    data.update(patch)
    with pytest.raises(sd.ConstraintError) as exc:
        sd.validate_constraints(data)
    assert f'"{field}"' in str(exc.value)


def test_cli_generate_and_lint(tmp_path, capsys):
    out = tmp_path / "w.txt"
    assert run(["generate", "--pool", "25", "--focus", "threshold", "--profile", "intermediate",
                "-o", str(out)]) == 0
    assert out.read_text().startswith("pool 25\n")
    capsys.readouterr()
    assert run(["lint", str(out)]) == 0
    assert "ERROR" not in capsys.readouterr().out


def test_cli_generate_from_constraints_file(tmp_path, capsys):
    cfile = tmp_path / "c.json"
    cfile.write_text(json.dumps({"poolLengthMeters": 50, "focus": "technique", "profile": "novice"}))
    assert run(["generate", "--constraints", str(cfile), "--interpret"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["interpreted"]["header"]["poolLengthMeters"] == 50


def test_cli_generate_missing_pool(capsys):
    assert run(["generate", "--focus", "sprint", "--profile", "elite"]) == 2
    assert "poolLengthMeters" in capsys.readouterr().err


def test_cli_lint_reports_errors(tmp_path, capsys):
    f = tmp_path / "bad.txt"
    f.write_text("pool 25\nthis is not a set\n")
    assert run(["lint", str(f)]) == 1
    assert "ERROR line 2: Unrecognized set syntax." in capsys.readouterr().out


def test_cli_interpret_json(tmp_path, capsys):
    f = tmp_path / "w.txt"
    f.write_text("4x50 FR @1:00\n")
    assert run(["interpret", str(f)]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["totals"]["estimatedMinutes"] == 4


def test_cli_fmt_refuses_invalid(tmp_path, capsys):
    f = tmp_path / "bad.txt"
    f.write_text("nope\n")
    assert run(["fmt", "-i", str(f)]) == 2
    assert f.read_text() == "nope\n"


def test_cli_fmt_in_place(tmp_path):
    f = tmp_path / "w.txt"
    f.write_text("main:  \n\n\n  4x50 FR\n\n")
    assert run(["fmt", "-i", str(f)]) == 0
    assert f.read_text() == "main:\n\n  4x50 FR\n"
