import pytest

try:
    import swimdsl as sd
except Exception as e:  # pragma: no cover
    pytest.skip(f"swimdsl unavailable: {e}", allow_module_level=True)


def messages(result):
    return [(e.line_number, e.message) for e in result.errors]


def test_unrecognized_line_reports_one_error():
    result = sd.interpret("this is not a set")
    assert messages(result) == [(1, "Unrecognized set syntax.")]
    assert result.sets == ()


def test_zero_reps_and_distance_are_clamped_and_kept():
    result = sd.interpret("main:\n0x0 FR easy")
    assert messages(result) == [(2, 'Invalid reps value "0".'), (2, 'Invalid distance value "0".')]
    assert len(result.sets) == 1
    assert result.sets[0].reps == 0 and result.sets[0].distance_meters == 0
    assert result.totals.total_distance_meters == 0


def test_bad_time_keeps_set_without_send_off():
    result = sd.interpret("4x100 FR @1:75 thresh")
    assert messages(result) == [(1, 'Invalid time format "1:75". Expected formats like "1:40" or "45".')]
    s = result.sets[0]
    assert s.send_off_seconds is None
    assert s.intensity == "thresh"
    assert result.totals.total_distance_meters == 400


def test_errors_keep_line_numbers_and_order():
    text = "pool 25\n\n:\nduration soon\n4x50 FR\nnonsense here\n"
    result = sd.interpret(text)
    assert [ln for ln, _ in messages(result)] == [3, 4, 6]


def test_all_error_document_still_returns_result():
    result = sd.interpret("foo\nbar baz\n:")
    assert len(result.errors) == 3
    assert result.sets == ()
    assert result.totals.total_distance_meters == 0
    assert result.totals.estimated_minutes is None
    assert result.warnings == ()


def test_interpret_rejects_non_text():
    with pytest.raises(TypeError):
        sd.interpret(None)
