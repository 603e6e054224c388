# config.py
import json

PATTERNS = ("sequential", "random", "linked-list", "matrix-row", "matrix-col")

# Latency in simulated cycles for each level
CACHE_LATENCIES = {
    "L1": 4,
    "L2": 12,
    "L3": 40,
    "RAM": 200,
}

DATASET_SIZES = {
    "small": 64,
    "medium": 256,
    "large": 1024,
}

PATTERN_DESCRIPTIONS = {
    "sequential": {
        "name": "Sequential Array Access",
        "description": "Accessing array elements one after another (arr[0], arr[1], arr[2]...)",
        "cache_impact": "Excellent locality. Each cache line holds several elements, so most accesses hit.",
    },
    "random": {
        "name": "Random Array Access",
        "description": "Accessing array elements in random order",
        "cache_impact": "Poor locality. Each access likely needs a new cache line.",
    },
    "linked-list": {
        "name": "Linked List Traversal",
        "description": "Following pointers from one node to the next (pointer chasing)",
        "cache_impact": "Unpredictable. Nodes may be scattered in memory, causing frequent misses.",
    },
    "matrix-row": {
        "name": "Matrix Row-Major Access",
        "description": "Accessing matrix elements row by row (matching memory layout)",
        "cache_impact": "Good locality. Memory is laid out row by row.",
    },
    "matrix-col": {
        "name": "Matrix Column-Major Access",
        "description": "Accessing matrix elements column by column (opposite of memory layout)",
        "cache_impact": "Poor locality. Jumps across rows cause many misses.",
    },
}


class SimulatorError(ValueError):
    """Base class for rejected simulator inputs."""


class InvalidConfiguration(SimulatorError):
    pass


class InvalidPattern(SimulatorError):
    pass


def check_positive(name, value):
    """Return value if it is a positive int, raise InvalidConfiguration otherwise."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidConfiguration(f"{name} must be a positive integer, got {value!r}")
    return value


def check_pattern(pattern):
    if pattern not in PATTERNS:
        raise InvalidPattern(
            f"unknown access pattern {pattern!r}; expected one of {', '.join(PATTERNS)}"
        )
    return pattern


def resolve_dataset_size(value):
    """Accept a positive block count or one of the DATASET_SIZES preset names."""
    if isinstance(value, str):
        if value not in DATASET_SIZES:
            raise InvalidConfiguration(
                f"unknown dataset size preset {value!r}; expected one of {', '.join(DATASET_SIZES)}"
            )
        return DATASET_SIZES[value]
    return check_positive("dataset_size", value)


class CacheConfig:
    """
    Capacities (in blocks) of the three cache levels plus the cache-line size.
    line_size is descriptive only; eviction never looks at it.
    """

    FIELDS = ("l1_size", "l2_size", "l3_size", "line_size")

    def __init__(self, l1_size=8, l2_size=32, l3_size=128, line_size=64):
        self.l1_size = l1_size
        self.l2_size = l2_size
        self.l3_size = l3_size
        self.line_size = line_size
        self.validate()

    @classmethod
    def from_dict(cls, d):
        """Build from the "cache" section of a JSON config."""
        return cls(
            l1_size=d.get("l1_size", DEFAULT_CONFIG.l1_size),
            l2_size=d.get("l2_size", DEFAULT_CONFIG.l2_size),
            l3_size=d.get("l3_size", DEFAULT_CONFIG.l3_size),
            line_size=d.get("line_size_bytes", DEFAULT_CONFIG.line_size),
        )

    def validate(self):
        for name in self.FIELDS:
            check_positive(name, getattr(self, name))

    def merged(self, **changes):
        """Return a new config with the non-None changes applied."""
        unknown = set(changes) - set(self.FIELDS)
        if unknown:
            raise InvalidConfiguration(f"unknown config fields: {', '.join(sorted(unknown))}")
        values = self.to_dict()
        values.update({k: v for k, v in changes.items() if v is not None})
        return CacheConfig(**values)

    def to_dict(self):
        return {name: getattr(self, name) for name in self.FIELDS}

    def __eq__(self, other):
        if not isinstance(other, CacheConfig):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return ("CacheConfig(l1_size={l1_size!r}, l2_size={l2_size!r}, "
                "l3_size={l3_size!r}, line_size={line_size!r})").format(**self.to_dict())


DEFAULT_CONFIG = CacheConfig()


def load_config(path="config.json"):
    with open(path, "r") as f:
        return json.load(f)
