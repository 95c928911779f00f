import pytest

from worldbuilder.models import Node, Relation, RelationMember, RunConfig, Way


class RecordingEditor:
    """Voxel sink double: records every call, answers occupancy from a set."""

    def __init__(self, occupied=(), max_x=100, max_z=100):
        self.occupied = set(occupied)
        self.max_x = max_x
        self.max_z = max_z
        self.calls = []
        self.saved = 0

    def block_at(self, x, y, z):
        return (x, y, z) in self.occupied

    def set_block(self, block, x, y, z, override_whitelist=None,
                  override_blacklist=None):
        self.calls.append(("set", block, (x, y, z),
                           override_whitelist, override_blacklist))

    def fill_blocks(self, block, x1, y1, z1, x2, y2, z2,
                    override_whitelist=None, override_blacklist=None):
        self.calls.append(("fill", block, (x1, y1, z1), (x2, y2, z2),
                           override_whitelist, override_blacklist))

    def save(self, metadata=None):
        self.saved += 1

    def sets(self):
        return [c for c in self.calls if c[0] == "set"]

    def fills(self):
        return [c for c in self.calls if c[0] == "fill"]


class FakeGround:
    """Elevation oracle double with per-column overrides."""

    def __init__(self, level=-62, elevation_enabled=False, levels=None):
        self.default = level
        self.elevation_enabled = elevation_enabled
        self.levels = levels or {}

    def level(self, coord):
        return self.levels.get((coord.x, coord.z), self.default)

    def min_level(self, coords):
        return min((self.level(c) for c in coords), default=self.default)

    def max_level(self, coords):
        return max((self.level(c) for c in coords), default=self.default)


class RecordingSink:
    def __init__(self):
        self.updates = []

    def notify(self, percentage, message):
        self.updates.append((percentage, message))

    @property
    def values(self):
        return [p for p, _ in self.updates]


class FakeBar:
    def __init__(self):
        self.updates = []
        self.postfix = None
        self.closed = False

    def update(self, n):
        self.updates.append(n)

    def set_postfix_str(self, s, refresh=True):
        self.postfix = s

    def close(self):
        self.closed = True


def square_way(way_id, x0, z0, x1, z1, tags):
    corners = [(x0, z0), (x1, z0), (x1, z1), (x0, z1), (x0, z0)]
    nodes = [Node(way_id * 10 + i, x, z) for i, (x, z) in enumerate(corners)]
    return Way(way_id, nodes, dict(tags))


def line_way(way_id, points, tags):
    nodes = [Node(way_id * 10 + i, x, z) for i, (x, z) in enumerate(points)]
    return Way(way_id, nodes, dict(tags))


def multipolygon(rel_id, outers, inners, tags):
    members = [RelationMember("outer", w) for w in outers]
    members += [RelationMember("inner", w) for w in inners]
    return Relation(rel_id, members, dict(tags))


@pytest.fixture
def editor():
    return RecordingEditor()


@pytest.fixture
def flat_ground():
    return FakeGround()


@pytest.fixture
def run_config(tmp_path):
    return RunConfig(path=str(tmp_path / "world"))
