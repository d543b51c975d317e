#!/usr/bin/env python3
import sys, json, argparse, re, math, logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple
from lark import Lark, Transformer
from lark.exceptions import LarkError

logger = logging.getLogger(__name__)

DEFAULT_SECTION = "main"
COMMENT_PREFIX = "#"
UNKNOWN_INTENSITY = "unknown"
DEFAULT_PACE_SECONDS_PER_100 = 90
VARIANCE_THRESHOLD_MINUTES = 10

# ---------------------------------------------------------------------------
# Time codec
# ---------------------------------------------------------------------------

_MMSS = re.compile(r"^([0-9]+):([0-9]+)$")
_SECONDS = re.compile(r"^[0-9]+$")

def parse_time(text: Optional[str]) -> Optional[int]:
    """Parse ``m:ss`` or a bare second count. Returns None for anything else."""
    if text is None: return None
    s = text.strip()
    m = _MMSS.match(s)
    if m:
        minutes, seconds = int(m.group(1)), int(m.group(2))
        if seconds >= 60: return None
        return minutes * 60 + seconds
    if _SECONDS.match(s): return int(s)
    return None

def _round_half_up(x: float) -> int: return int(math.floor(x + 0.5))

def format_time(seconds: float) -> str:
    if not math.isfinite(seconds) or seconds < 0:
        raise ValueError(f"cannot format {seconds!r} as a time")
    whole = _round_half_up(seconds)
    m, s = divmod(whole, 60)
    return f"{m}:{s:02d}"

# ---------------------------------------------------------------------------
# Workout model
# ---------------------------------------------------------------------------

def _drop_none(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}

@dataclass(frozen=True)
class WorkoutHeader:
    pool_length_meters: Optional[int] = None
    planned_duration_minutes: Optional[int] = None
    title: Optional[str] = None
    focus: Optional[str] = None
    profile: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "poolLengthMeters": self.pool_length_meters,
            "plannedDurationMinutes": self.planned_duration_minutes,
            "title": self.title, "focus": self.focus, "profile": self.profile,
        })

@dataclass(frozen=True)
class SetInterval:
    section: str
    reps: int
    distance_meters: int
    stroke: str
    send_off_seconds: Optional[int] = None
    intensity: Optional[str] = None
    raw: str = ""
    line_number: int = 0

    @property
    def total_meters(self) -> int: return self.reps * self.distance_meters

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "section": self.section, "reps": self.reps, "distanceMeters": self.distance_meters,
            "stroke": self.stroke, "sendOffSeconds": self.send_off_seconds,
            "intensity": self.intensity, "raw": self.raw, "lineNumber": self.line_number,
        })

@dataclass(frozen=True)
class WorkoutTotals:
    total_distance_meters: int
    distance_by_section: Mapping[str, int]
    distance_by_intensity: Mapping[str, int]
    estimated_minutes: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "totalDistanceMeters": self.total_distance_meters,
            "distanceBySection": dict(self.distance_by_section),
            "distanceByIntensity": dict(self.distance_by_intensity),
            "estimatedMinutes": self.estimated_minutes,
        })

@dataclass(frozen=True)
class ParseError:
    line_number: int
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"lineNumber": self.line_number, "message": self.message}

@dataclass(frozen=True)
class InterpretedWorkout:
    header: WorkoutHeader
    sets: Tuple[SetInterval, ...]
    totals: WorkoutTotals
    errors: Tuple[ParseError, ...] = ()
    warnings: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "header": self.header.to_dict(),
            "sets": [s.to_dict() for s in self.sets],
            "totals": self.totals.to_dict(),
            "errors": [e.to_dict() for e in self.errors],
            "warnings": list(self.warnings),
        }

# ---------------------------------------------------------------------------
# Grammar parser
# ---------------------------------------------------------------------------

# [<reps>x]<distance> <stroke>[ @<time>][ <intensity>]
SET_GRAMMAR = r"""
start: volume stroke sendoff? intensity?

volume: VOLUME
stroke: WORD
sendoff: SENDOFF
intensity: WORD

VOLUME: /(?:[0-9]+x)?[0-9]+(?=\s)/
SENDOFF.2: /@\S+/
WORD: /\S+/

WS: /[^\S\r\n]+/
%ignore WS
"""

class ToSet(Transformer):
    def start(self, xs):
        out = {"reps": None, "distance": None, "stroke": None, "time": None, "intensity": None}
        for k, v in xs:
            if k == "volume":
                reps, _, dist = v.rpartition("x")
                out["reps"] = reps or None; out["distance"] = dist
            else:
                out[k] = v
        return out
    def volume(self, t):    return ("volume", str(t[0]))
    def stroke(self, t):    return ("stroke", str(t[0]))
    def sendoff(self, t):   return ("time", str(t[0])[1:])
    def intensity(self, t): return ("intensity", str(t[0]))

SET_PARSER = Lark(SET_GRAMMAR, start="start", parser="lalr")

def parse_set_tokens(text: str) -> Optional[Dict[str, Optional[str]]]:
    """Match one trimmed line against the set grammar; None when it does not fit."""
    try:
        tree = SET_PARSER.parse(text)
    except LarkError:
        return None
    return ToSet().transform(tree)

def _first_int(rest: str) -> Optional[int]:
    m = re.search(r"[0-9]+", rest)
    return int(m.group(0)) if m else None

def _verbatim(rest: str) -> str: return rest

# key -> (header field, value parser, label used in diagnostics)
HEADER_DIRECTIVES: Mapping[str, Tuple[str, Callable[[str], Any], str]] = MappingProxyType({
    "pool":     ("pool_length_meters", _first_int, "pool length"),
    "duration": ("planned_duration_minutes", _first_int, "duration"),
    "title":    ("title", _verbatim, "title"),
    "focus":    ("focus", _verbatim, "focus"),
    "profile":  ("profile", _verbatim, "profile"),
})

@dataclass(frozen=True)
class ParsedLine:
    kind: str  # blank | section | header | set | invalid
    section: Optional[str] = None
    header: Optional[Tuple[str, Any]] = None
    interval: Optional[SetInterval] = None
    errors: Tuple[str, ...] = ()

def _parse_header(trimmed: str) -> Optional[ParsedLine]:
    parts = trimmed.split(None, 1)
    directive = HEADER_DIRECTIVES.get(parts[0].lower())
    if directive is None: return None
    field, parse_value, label = directive
    value = parse_value(parts[1] if len(parts) > 1 else "")
    if value is None:
        return ParsedLine("header", errors=(f'Unable to parse {label} from "{trimmed}".',))
    return ParsedLine("header", header=(field, value))

def _parse_set(raw: str, trimmed: str, section: str, line_number: int) -> ParsedLine:
    tokens = parse_set_tokens(trimmed)
    if tokens is None:
        return ParsedLine("invalid", errors=("Unrecognized set syntax.",))
    errors = []
    reps = int(tokens["reps"]) if tokens["reps"] is not None else 1
    if reps <= 0:
        errors.append(f'Invalid reps value "{tokens["reps"] or ""}".'); reps = 0
    distance = int(tokens["distance"])
    if distance <= 0:
        errors.append(f'Invalid distance value "{tokens["distance"]}".'); distance = 0
    send_off = None
    if tokens["time"] is not None:
        send_off = parse_time(tokens["time"])
        if send_off is None:
            errors.append(f'Invalid time format "{tokens["time"]}". Expected formats like "1:40" or "45".')
    interval = SetInterval(section=section, reps=reps, distance_meters=distance, stroke=tokens["stroke"],
                           send_off_seconds=send_off, intensity=tokens["intensity"],
                           raw=raw, line_number=line_number)
    return ParsedLine("set", interval=interval, errors=tuple(errors))

def parse_line(raw: str, section: str = DEFAULT_SECTION, line_number: int = 0) -> ParsedLine:
    """Classify and parse a single line given the active section.

    Order matters: comments, then section headers, then header directives,
    then the set grammar. A header directive whose value cannot be read is
    still consumed as a header line.
    """
    trimmed = raw.strip()
    if not trimmed or trimmed.startswith(COMMENT_PREFIX):
        return ParsedLine("blank")
    if trimmed.endswith(":"):
        name = trimmed[:-1].strip().lower()
        if not name: return ParsedLine("invalid", errors=("Empty section name.",))
        return ParsedLine("section", section=name)
    header = _parse_header(trimmed)
    if header is not None: return header
    return _parse_set(raw, trimmed, section, line_number)

# ---------------------------------------------------------------------------
# Interpreter
# ---------------------------------------------------------------------------

class _Fold:
    """Per-call accumulator threaded through the line loop."""
    def __init__(self):
        self.section = DEFAULT_SECTION
        self.header: Dict[str, Any] = {}
        self.sets: List[SetInterval] = []
        self.errors: List[ParseError] = []

    def feed(self, line_number: int, raw: str) -> None:
        parsed = parse_line(raw, self.section, line_number)
        if parsed.kind == "section": self.section = parsed.section
        if parsed.header is not None:
            field, value = parsed.header
            self.header[field] = value
        if parsed.interval is not None: self.sets.append(parsed.interval)
        self.errors.extend(ParseError(line_number, msg) for msg in parsed.errors)

def compute_totals(sets: Iterable[SetInterval]) -> WorkoutTotals:
    total = 0; by_section: Dict[str, int] = {}; by_intensity: Dict[str, int] = {}
    for s in sets:
        d = s.total_meters
        total += d
        by_section[s.section] = by_section.get(s.section, 0) + d
        key = s.intensity if s.intensity is not None else UNKNOWN_INTENSITY
        by_intensity[key] = by_intensity.get(key, 0) + d
    return WorkoutTotals(total, MappingProxyType(by_section), MappingProxyType(by_intensity))

def estimate_minutes(sets: List[SetInterval], total_distance: int) -> Optional[float]:
    """Send-off based estimate when at least half the sets carry a send-off,
    otherwise a fixed pace over the total distance."""
    if not sets: return None
    with_send_off = [s for s in sets if s.send_off_seconds is not None]
    if len(with_send_off) >= len(sets) / 2:
        return sum(s.reps * s.send_off_seconds for s in with_send_off) / 60
    if total_distance <= 0: return None
    return (total_distance / 100) * DEFAULT_PACE_SECONDS_PER_100 / 60

def variance_warnings(header: WorkoutHeader, estimate: Optional[float]) -> List[str]:
    planned = header.planned_duration_minutes
    if planned is None or estimate is None: return []
    diff = estimate - planned
    if abs(diff) <= VARIANCE_THRESHOLD_MINUTES: return []
    if diff > 0:
        return [f"Estimated duration (~{estimate:.1f} min) exceeds planned duration "
                f"({planned} min) by about {abs(diff):.1f} min."]
    return [f"Estimated duration (~{estimate:.1f} min) is significantly shorter than planned duration "
            f"({planned} min) by about {abs(diff):.1f} min."]

def interpret(text: str) -> InterpretedWorkout:
    if not isinstance(text, str):
        raise TypeError(f"interpret() expects str, got {type(text).__name__}")
    fold = _Fold()
    lines = re.split(r"\r?\n", text)
    for i, raw in enumerate(lines, start=1):
        fold.feed(i, raw)
    header = WorkoutHeader(**fold.header)
    totals = compute_totals(fold.sets)
    estimate = estimate_minutes(fold.sets, totals.total_distance_meters)
    totals = WorkoutTotals(totals.total_distance_meters, totals.distance_by_section,
                           totals.distance_by_intensity, estimate)
    warnings = variance_warnings(header, estimate)
    logger.debug("interpreted %d lines: %d sets, %d errors, %d warnings",
                 len(lines), len(fold.sets), len(fold.errors), len(warnings))
    return InterpretedWorkout(header, tuple(fold.sets), totals, tuple(fold.errors), tuple(warnings))

# ---------------------------------------------------------------------------
# Template catalog
# ---------------------------------------------------------------------------

class Focus(str, Enum):
    AEROBIC = "aerobic"
    THRESHOLD = "threshold"
    SPRINT = "sprint"
    TECHNIQUE = "technique"

class Profile(str, Enum):
    NOVICE = "novice"
    INTERMEDIATE = "intermediate"
    ELITE = "elite"

BASELINE_POOL = 25
SECTION_ORDER = ("warmup", "preset", "main", "cooldown")
PROFILE_FACTORS = MappingProxyType({Profile.NOVICE: 0.75, Profile.INTERMEDIATE: 1.0, Profile.ELITE: 1.25})
MIN_TARGET_DISTANCE = 1500
MAX_TARGET_DISTANCE = 6000
MAX_REP_GROWTH = 3

@dataclass(frozen=True)
class TemplateLine:
    """One block of a template, written against a 25 pool."""
    section: str
    base_reps: int
    distance: int
    stroke: str
    send_off: Optional[int] = None
    intensity: Optional[str] = None
    comment: Optional[str] = None

T = TemplateLine

AEROBIC_TEMPLATE = (
    T("warmup", 1, 400, "FR", None, "easy"),
    T("warmup", 4, 50, "kick", parse_time("1:10"), "easy"),
    T("preset", 6, 50, "FR", parse_time("0:55"), "moderate", "Build each 50 to moderate"),
    T("preset", 4, 75, "IM", parse_time("1:30"), "moderate"),
    T("main", 6, 200, "FR", parse_time("3:00"), "aerobic", "Steady 200s, hold the same pace"),
    T("main", 4, 100, "pull", parse_time("1:40"), "aerobic"),
    T("main", 8, 50, "FR", parse_time("0:55"), "moderate"),
    T("cooldown", 1, 200, "choice", None, "easy"),
    T("cooldown", 1, 100, "BK", None, "easy"),
)

THRESHOLD_TEMPLATE = (
    T("warmup", 1, 400, "FR", None, "easy"),
    T("warmup", 4, 50, "drill", parse_time("1:05"), "easy"),
    T("preset", 8, 50, "FR", parse_time("0:50"), "moderate", "Descend 1-4, twice through"),
    T("preset", 4, 25, "FR", parse_time("0:35"), "fast"),
    T("main", 12, 100, "FR", parse_time("1:35"), "thresh", "Threshold 100s, hold best average"),
    T("main", 1, 200, "pull", None, "easy"),
    T("main", 6, 150, "FR", parse_time("2:20"), "thresh"),
    T("cooldown", 1, 200, "choice", None, "easy"),
)

SPRINT_TEMPLATE = (
    T("warmup", 1, 400, "FR", None, "easy"),
    T("warmup", 6, 50, "kick", parse_time("1:10"), "easy"),
    T("preset", 8, 25, "FR", parse_time("0:40"), "fast", "Build to fast by the wall"),
    T("preset", 4, 50, "FR", parse_time("1:00"), "moderate"),
    T("main", 12, 25, "FR", parse_time("1:00"), "sprint", "All-out 25s, full recovery"),
    T("main", 8, 50, "choice", parse_time("1:30"), "sprint"),
    T("main", 1, 300, "FR", None, "easy"),
    T("main", 6, 25, "FL", parse_time("0:45"), "sprint"),
    T("cooldown", 1, 300, "choice", None, "easy"),
)

TECHNIQUE_TEMPLATE = (
    T("warmup", 1, 300, "FR", None, "easy"),
    T("warmup", 4, 50, "drill", parse_time("1:10"), "easy"),
    T("preset", 8, 50, "drill", parse_time("1:05"), "easy", "Catch-up drill / swim by 25"),
    T("main", 8, 100, "FR", parse_time("2:00"), "aerobic", "Long, relaxed strokes; count strokes per length"),
    T("main", 6, 75, "kick", parse_time("1:45"), "moderate", "Kick on side, 6 kicks per stroke"),
    T("main", 1, 200, "choice", None, "easy"),
    T("main", 4, 75, "IM", parse_time("1:40"), "moderate"),
    T("cooldown", 1, 200, "choice", None, "easy"),
)

TEMPLATES: Mapping[Focus, Tuple[TemplateLine, ...]] = MappingProxyType({
    Focus.AEROBIC: AEROBIC_TEMPLATE,
    Focus.THRESHOLD: THRESHOLD_TEMPLATE,
    Focus.SPRINT: SPRINT_TEMPLATE,
    Focus.TECHNIQUE: TECHNIQUE_TEMPLATE,
})

# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------

class ConstraintError(ValueError):
    pass

@dataclass(frozen=True)
class GenerateConstraints:
    pool_length_meters: float
    focus: Focus
    profile: Profile
    target_distance_meters: Optional[float] = None
    target_duration_minutes: Optional[float] = None
    title: Optional[str] = None

def _num(v):
    """Integral floats render as ints (25.0 -> 25)."""
    if isinstance(v, float) and v.is_integer(): return int(v)
    return v

def _positive(v) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v) and v > 0

def normalize_to_pool(distance: int, pool: float) -> int:
    lengths = -(-distance // pool)
    return _round_half_up(lengths * pool)

def nominal_distance(template: Iterable[TemplateLine], pool: float) -> int:
    return sum(t.base_reps * normalize_to_pool(t.distance, pool) for t in template)

def target_distance(constraints: GenerateConstraints, nominal: int) -> float:
    target = constraints.target_distance_meters
    if not target or target <= 0:
        target = nominal * PROFILE_FACTORS[Profile(constraints.profile)]
    return max(MIN_TARGET_DISTANCE, min(MAX_TARGET_DISTANCE, target))

def scale_reps(base_reps: int, scale: float) -> int:
    return max(1, min(base_reps * MAX_REP_GROWTH, _round_half_up(base_reps * scale)))

def render_set_line(reps: int, distance: int, stroke: str,
                    send_off: Optional[int] = None, intensity: Optional[str] = None) -> str:
    out = f"{reps}x{distance}" if reps != 1 else f"{distance}"
    out += f" {stroke}"
    if send_off is not None: out += f" @{format_time(send_off)}"
    if intensity: out += f" {intensity}"
    return out

def _clean_title(title: Optional[str]) -> str:
    # a trailing ':' would turn the header line into a section header
    return re.sub(r"[\s:]+$", "", " ".join((title or "").split()))

def _resolve(constraints: GenerateConstraints) -> Tuple[Focus, Profile]:
    try:
        return Focus(constraints.focus), Profile(constraints.profile)
    except ValueError as e:
        raise ConstraintError(str(e)) from e

def generate(constraints: GenerateConstraints) -> str:
    focus, profile = _resolve(constraints)
    pool = _num(constraints.pool_length_meters)
    if not _positive(pool):
        raise ConstraintError(f"pool length must be positive, got {pool!r}")
    template = TEMPLATES[focus]
    nominal = nominal_distance(template, pool)
    target = target_distance(constraints, nominal)
    scale = target / nominal
    logger.debug("generate focus=%s profile=%s pool=%s nominal=%d target=%.0f scale=%.3f",
                 focus.value, profile.value, pool, nominal, target, scale)

    lines = [f"pool {pool}"]
    if constraints.target_duration_minutes:
        lines.append(f"duration {_num(constraints.target_duration_minutes)}")
    title = _clean_title(constraints.title)
    if title: lines.append(f"title {title}")
    lines += [f"focus {focus.value}", f"profile {profile.value}", ""]
    for section in SECTION_ORDER:
        entries = [t for t in template if t.section == section]
        if not entries: continue
        lines.append(f"{section}:")
        for t in entries:
            if t.comment: lines.append(f"  {COMMENT_PREFIX} {t.comment}")
            reps = scale_reps(t.base_reps, scale)
            lines.append("  " + render_set_line(reps, normalize_to_pool(t.distance, pool),
                                                t.stroke, t.send_off, t.intensity))
        lines.append("")
    return "\n".join(lines).rstrip("\n")

def validate_constraints(data: Mapping[str, Any]) -> GenerateConstraints:
    """Validate a client payload (camelCase keys) into GenerateConstraints."""
    if not isinstance(data, Mapping) or not _positive(data.get("poolLengthMeters")):
        raise ConstraintError('Invalid "poolLengthMeters". Expected a positive number (e.g., 25 or 50).')
    focus = data.get("focus")
    if focus not in [f.value for f in Focus]:
        raise ConstraintError(f'Invalid "focus". Expected one of: {", ".join(f.value for f in Focus)}.')
    profile = data.get("profile")
    if profile not in [p.value for p in Profile]:
        raise ConstraintError(f'Invalid "profile". Expected one of: {", ".join(p.value for p in Profile)}.')
    distance = data.get("targetDistanceMeters")
    if distance is not None and not _positive(distance):
        raise ConstraintError('Invalid "targetDistanceMeters". If provided, it must be a positive number.')
    duration = data.get("targetDurationMinutes")
    if duration is not None and not _positive(duration):
        raise ConstraintError('Invalid "targetDurationMinutes". If provided, it must be a positive number.')
    title = data.get("title")
    return GenerateConstraints(
        pool_length_meters=_num(data["poolLengthMeters"]), focus=Focus(focus), profile=Profile(profile),
        target_distance_meters=_num(distance), target_duration_minutes=_num(duration),
        title=title if isinstance(title, str) else None,
    )

def generate_and_interpret(constraints: GenerateConstraints) -> Dict[str, Any]:
    dsl = generate(constraints)
    return {"dsl": dsl, "interpreted": interpret(dsl).to_dict()}

# ---------------------------------------------------------------------------
# Summary / formatting
# ---------------------------------------------------------------------------

def summarize(workouts: Iterable[InterpretedWorkout]) -> Dict[str, Any]:
    total = 0; count = 0; by_focus: Dict[str, int] = {}; by_profile: Dict[str, int] = {}
    for w in workouts:
        dist = w.totals.total_distance_meters
        total += dist; count += 1
        fk = w.header.focus if w.header.focus is not None else "unknown"
        by_focus[fk] = by_focus.get(fk, 0) + dist
        pk = w.header.profile if w.header.profile is not None else "unknown"
        by_profile[pk] = by_profile.get(pk, 0) + dist
    return {"totalDistanceMeters": total, "workoutCount": count,
            "distanceByFocus": by_focus, "distanceByProfile": by_profile}

def normalize_text(text: str) -> str:
    """Trailing spaces off, at most one blank line in a row, no leading blanks,
    exactly one final newline."""
    lines = [ln.rstrip() for ln in text.splitlines()]
    kept = [ln for i, ln in enumerate(lines) if ln or (i > 0 and lines[i - 1])]
    return "\n".join(kept).rstrip("\n") + "\n"

# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def _dump(obj) -> str: return json.dumps(obj, ensure_ascii=False, indent=2)

def _emit(data: str, out: Optional[str]) -> None:
    if out: Path(out).write_text(data); print(f"Saved -> {out}")
    else: print(data)

def main(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(prog="swimdsl")
    sub = ap.add_subparsers(dest="cmd", required=True)
    p1 = sub.add_parser("interpret"); p1.add_argument("file"); p1.add_argument("-o", "--out")
    p2 = sub.add_parser("lint");      p2.add_argument("file")
    p3 = sub.add_parser("generate")
    p3.add_argument("--pool", type=float)
    p3.add_argument("--focus", choices=[f.value for f in Focus])
    p3.add_argument("--profile", choices=[p.value for p in Profile])
    p3.add_argument("--distance", type=float)
    p3.add_argument("--duration", type=float)
    p3.add_argument("--title")
    p3.add_argument("--constraints", help="constraints JSON file (camelCase keys)")
    p3.add_argument("--interpret", action="store_true", help="emit dsl + interpreted JSON")
    p3.add_argument("-o", "--out")
    p4 = sub.add_parser("fmt");   p4.add_argument("file"); p4.add_argument("-i", "--in-place", action="store_true"); p4.add_argument("-o", "--out")
    p5 = sub.add_parser("stats"); p5.add_argument("files", nargs="+")
    for pp in (p1, p2, p3, p4, p5):
        pp.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "interpret":
        result = interpret(Path(args.file).read_text())
        _emit(_dump(result.to_dict()), args.out)
        sys.exit(0)
    if args.cmd == "lint":
        result = interpret(Path(args.file).read_text())
        for e in result.errors: print(f"ERROR line {e.line_number}: {e.message}")
        for w in result.warnings: print(f"WARNING: {w}")
        sys.exit(1 if result.errors else 0)
    if args.cmd == "generate":
        if args.constraints:
            data = json.loads(Path(args.constraints).read_text())
        else:
            data = {"poolLengthMeters": _num(args.pool), "focus": args.focus, "profile": args.profile,
                    "targetDistanceMeters": _num(args.distance), "targetDurationMinutes": _num(args.duration),
                    "title": args.title}
        try:
            constraints = validate_constraints(data)
        except ConstraintError as e:
            print(str(e), file=sys.stderr)
            sys.exit(2)
        if args.interpret: _emit(_dump(generate_and_interpret(constraints)), args.out)
        else: _emit(generate(constraints), args.out)
        sys.exit(0)
    if args.cmd == "fmt":
        raw = Path(args.file).read_text()
        errors = interpret(raw).errors
        if errors:
            first = errors[0]
            print(f"Format check failed: line {first.line_number}: {first.message}", file=sys.stderr)
            sys.exit(2)
        normalized = normalize_text(raw)
        if args.out:
            Path(args.out).write_text(normalized)
            print(f"Saved -> {args.out}")
        elif args.in_place:
            Path(args.file).write_text(normalized)
        else:
            print(normalized, end="")
        sys.exit(0)
    if args.cmd == "stats":
        workouts = [interpret(Path(f).read_text()) for f in args.files]
        print(_dump(summarize(workouts)))
        sys.exit(0)

if __name__ == "__main__":
    main()
