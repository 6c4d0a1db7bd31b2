import os
import stat
from pathlib import Path

import pytest

from compinst.fs import read_text_exact, write_text_atomic

from tests.infrastructure import read, write


def test_write_keeps_line_endings(tmp_path: Path):
    path = tmp_path / "config" / "modules.config.php"
    write_text_atomic(path, "<?php\r\nreturn [];\r\n")
    assert read_text_exact(path) == "<?php\r\nreturn [];\r\n"
    assert sorted(p.name for p in path.parent.iterdir()) == ["modules.config.php"]


def test_write_leaves_a_same_named_tmp_file_alone(tmp_path: Path):
    path = write(tmp_path / "config.php", "<?php return [];\n")
    backup = write(tmp_path / "config.php.tmp", "my notes\n")

    write_text_atomic(path, "<?php return ['A'];\n")

    assert read(path) == "<?php return ['A'];\n"
    assert read(backup) == "my notes\n"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["config.php", "config.php.tmp"]


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_write_preserves_file_mode(tmp_path: Path):
    path = write(tmp_path / "config.php", "<?php return [];\n")
    path.chmod(0o640)

    write_text_atomic(path, "<?php return ['A'];\n")

    assert stat.S_IMODE(path.stat().st_mode) == 0o640
