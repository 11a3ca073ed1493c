import stat
import sys
import pytest
import yaml
from pathlib import Path
from ffpool.config.models import AppConfig
from ffpool.infrastructure.event_bus import EventBus

# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def sample_config(tmp_path):
    """Returns a sample AppConfig writing next to the inputs under tmp_path."""
    return AppConfig(
        threads=4,
        ffmpeg_options="-c:v libx265 -crf 28",
        input_pattern=str(tmp_path / "in" / "**" / "*.mp4"),
        output_template=str(tmp_path / "out" / "{parent}" / "{name}_out.{ext}"),
    )

@pytest.fixture
def config_yaml_path(tmp_path):
    """Creates a temporary YAML config file."""
    conf_dir = tmp_path / "conf"
    conf_dir.mkdir()
    conf_file = conf_dir / "ffpool.yaml"

    content = {
        "threads": 3,
        "ffmpeg_options": "-y -c:a copy",
        "input_pattern": "videos/*.mov",
        "output_template": "out/{name}.mp4",
        "fail_on_error": True,
    }
    with open(conf_file, "w") as f:
        yaml.dump(content, f)
    return conf_file

# ============================================================================
# Infrastructure Fixtures
# ============================================================================

@pytest.fixture
def event_bus():
    return EventBus()

@pytest.fixture
def recorded_events(event_bus):
    """Subscribes a recorder to every event type and returns the list it fills."""
    from ffpool.domain import events as ev

    received = []
    for event_type in (
        ev.DiscoveryFinished, ev.WorkerStarted, ev.WorkerFinished,
        ev.JobStarted, ev.JobCompleted, ev.JobFailed, ev.ProcessingFinished,
    ):
        event_bus.subscribe(event_type, received.append)
    return received

# ============================================================================
# File Fixtures
# ============================================================================

@pytest.fixture
def input_tree(tmp_path):
    """Creates in/a/one.mp4, in/a/two.mp4 and in/b/three.mp4."""
    files = []
    for rel in ("a/one.mp4", "a/two.mp4", "b/three.mp4"):
        path = tmp_path / "in" / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"video data {rel}")
        files.append(path)
    return files

@pytest.fixture
def fake_tool(tmp_path):
    """A POSIX shell stand-in for ffmpeg.

    Usage mirrors the real argument shape: fake -i INPUT [options...] OUTPUT.
    Copies INPUT to OUTPUT, or fails with a message on stderr when any option
    equals --fail or when INPUT contains 'broken'.
    """
    if sys.platform == "win32":
        pytest.skip("fake tool is a POSIX shell script")

    script = tmp_path / "bin" / "fake-ffmpeg"
    script.parent.mkdir()
    script.write_text(
        "#!/bin/sh\n"
        "input=\"$2\"\n"
        "for arg in \"$@\"; do\n"
        "  if [ \"$arg\" = \"--fail\" ]; then echo \"forced failure\" >&2; exit 3; fi\n"
        "  output=\"$arg\"\n"
        "done\n"
        "case \"$input\" in *broken*) echo \"broken input: $input\" >&2; exit 1;; esac\n"
        "echo \"transcoding $input\"\n"
        "cp \"$input\" \"$output\"\n"
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script
