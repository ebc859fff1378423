"""
Shared fixtures: a scripted host that answers shell command strings, and a fake clock
"""
import re
import shlex
import sys
from pathlib import Path
import pytest
# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
from libs.config import ActionConfig  # noqa: E402

TEST_RE = re.compile(r"^test -[fed] (\S+) && echo exists")
MOVE_RE = re.compile(r"^mv -f (\S+) (\S+) 2>&1$")
REMOVE_RE = re.compile(r"^rm -r?f (\S+) 2>&1$")
# a bare redirect creates its target whether or not the command succeeds
REDIRECT_RE = re.compile(r"^[^<>]* > (\S+)$")


class FakeHost:
    """
    Stands in for LocalService.
    File tests, mv, rm and bare redirects operate on an in-memory path set; any other command is answered
    by the most recently registered rule whose fragment it contains, else by the default.
    """

    def __init__(self, paths=(), default=("", 0)):
        self.paths = set(paths)
        self.default = default
        self.rules = []
        self.commands = []

    def on(self, fragment, output="", exit_code=0):
        """Answer commands containing fragment; output may be a callable(command) -> (output, exit_code)"""
        self.rules.insert(0, (fragment, output, exit_code))
        return self

    def execute(self, command, timeout=None, sudo=False):
        self.commands.append(command)
        match = REDIRECT_RE.match(command)
        if match:
            self.paths.add(shlex.split(match.group(1))[0])
        for fragment, output, exit_code in self.rules:
            if fragment in command:
                if callable(output):
                    return output(command)
                return output, exit_code
        match = TEST_RE.match(command)
        if match:
            path = shlex.split(match.group(1))[0]
            return ("exists" if path in self.paths else "not_found"), 0
        match = MOVE_RE.match(command)
        if match:
            source, destination = (shlex.split(group)[0] for group in match.groups())
            if source not in self.paths:
                return f"mv: cannot stat '{source}': No such file or directory", 1
            self.paths.discard(source)
            self.paths.add(destination)
            return "", 0
        match = REMOVE_RE.match(command)
        if match:
            self.paths.discard(shlex.split(match.group(1))[0])
            return "", 0
        return self.default

    def ran(self, fragment) -> bool:
        return any(fragment in command for command in self.commands)

    def count(self, fragment) -> int:
        return sum(1 for command in self.commands if fragment in command)

    def index(self, fragment) -> int:
        """Position of the first command containing fragment"""
        for position, command in enumerate(self.commands):
            if fragment in command:
                return position
        raise AssertionError(f"no command containing {fragment!r}; ran: {self.commands}")


class FakeClock:
    """Monotonic clock whose sleep advances time instantly"""

    def __init__(self, start=1000.0):
        self.start = start
        self.now = start
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds

    @property
    def elapsed(self):
        return self.now - self.start
@pytest.fixture

def host():
    """Fixture for an empty scripted host"""
    return FakeHost()
@pytest.fixture

def clock():
    """Fixture for a fake clock"""
    return FakeClock()
@pytest.fixture

def cfg(tmp_path):
    """Fixture for default configuration with state kept under tmp_path"""
    return ActionConfig.from_dict({"state_dir": str(tmp_path / "state")})
@pytest.fixture

def make_host():
    """Fixture returning the FakeHost class for tests that need preset paths or defaults"""
    return FakeHost
