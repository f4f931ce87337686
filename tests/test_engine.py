import os

import pytest

from disktally import prober
from disktally.config import ScanConfig
from disktally.engine import calculate
from disktally.utils import root_key

from conftest import write


def key(p):
    return root_key(str(p))


def readable_total(root):
    total = 0
    for dirpath, _, filenames in os.walk(root):
        for fn in filenames:
            total += os.path.getsize(os.path.join(dirpath, fn))
    return total


def test_deep_tree_totals(deep_tree):
    res = calculate(str(deep_tree), ScanConfig(workers=4))
    s = res.sizes

    assert res.root == key(deep_tree)
    assert res.total_bytes == 210 == readable_total(deep_tree)
    assert s[key(deep_tree / "a")] == 140
    assert s[key(deep_tree / "a" / "b")] == 120
    assert s[key(deep_tree / "a" / "b" / "c")] == 90
    assert s[key(deep_tree / "a" / "b" / "c" / "d" / "e")] == 50
    assert s[key(deep_tree / "x")] == 60
    assert s[key(deep_tree / "x" / "y" / "z" / "z.bin")] == 60
    assert res.files == 6
    assert res.deferred_dirs == 2


def test_no_keys_above_root(deep_tree):
    res = calculate(str(deep_tree))
    root = key(deep_tree)
    assert all(k == root or k.startswith(root + "/") for k in res.sizes)


def test_every_ancestor_present(deep_tree):
    res = calculate(str(deep_tree))
    root = key(deep_tree)
    for dirpath, _, filenames in os.walk(deep_tree):
        for fn in filenames:
            p = os.path.join(dirpath, fn)
            size = os.path.getsize(p)
            k = key(p)
            while True:
                assert res.sizes[k] >= size
                if k == root:
                    break
                k = k.rsplit("/", 1)[0]


def test_scenario_file_beyond_eager_cutoff(tmp_path):
    r = tmp_path / "r"
    write(r / "a.txt", 10)
    b = write(r / "sub" / "l2" / "l3" / "l4" / "b.txt", 20)

    s = calculate(str(r)).sizes

    assert s[key(r)] == 30
    assert s[key(r / "a.txt")] == 10
    assert s[key(r / "sub")] == 20
    assert s[key(r / "sub" / "l2")] == 20
    assert s[key(r / "sub" / "l2" / "l3")] == 20
    assert s[key(r / "sub" / "l2" / "l3" / "l4")] == 20
    assert s[key(b)] == 20


def test_empty_root(tmp_path):
    res = calculate(str(tmp_path))
    assert dict(res.sizes) == {key(tmp_path): 0}
    assert res.files == 0


@pytest.mark.parametrize("config", [
    ScanConfig(workers=1, max_batches=1, chunk_size=1),
    ScanConfig(workers=2, max_batches=16, chunk_size=64),
    ScanConfig(workers=32, max_batches=16, chunk_size=3),
    ScanConfig(workers=8, eager_depth=0),
    ScanConfig(workers=8, eager_depth=7),
])
def test_results_independent_of_parallelism(tmp_path, config):
    for i in range(30):
        write(tmp_path / f"d{i % 5}" / f"e{i % 4}" / f"f{i % 3}" / f"g{i}" / f"n{i}.bin", i + 1)
        write(tmp_path / f"d{i % 5}" / f"top{i}.bin", 2)

    baseline = calculate(str(tmp_path), ScanConfig(workers=1, max_batches=1))
    res = calculate(str(tmp_path), config)

    assert dict(res.sizes) == dict(baseline.sizes)
    assert res.total_bytes == readable_total(tmp_path)


def test_unreadable_file_is_excluded(deep_tree, monkeypatch, caplog):
    write(deep_tree / "a" / "b" / "c" / "d" / "secret.bin", 1000)
    real = prober._entry_size

    def fake(entry, follow_symlinks):
        if entry.name == "secret.bin":
            raise PermissionError(13, "Permission denied", entry.path)
        return real(entry, follow_symlinks)

    monkeypatch.setattr(prober, "_entry_size", fake)
    res = calculate(str(deep_tree))

    assert res.total_bytes == 210
    assert key(deep_tree / "a" / "b" / "c" / "d" / "secret.bin") not in res.sizes
    assert "secret.bin" in caplog.text


@pytest.mark.skipif(not hasattr(os, "geteuid") or os.geteuid() == 0,
                    reason="permission bits are not enforced for root")
def test_unreadable_directory_is_skipped(deep_tree):
    locked = deep_tree / "a" / "b" / "c" / "d"
    os.chmod(locked, 0)
    try:
        res = calculate(str(deep_tree))
    finally:
        os.chmod(locked, 0o755)
    assert res.total_bytes == 210 - 50


def test_missing_root_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        calculate(str(tmp_path / "nope"))


def test_file_root_raises(tmp_path):
    f = write(tmp_path / "f", 1)
    with pytest.raises(NotADirectoryError):
        calculate(str(f))


def test_unlistable_directory_in_leaf_root_is_skipped(deep_tree, monkeypatch, caplog):
    locked = str(deep_tree / "a" / "b" / "c" / "d")
    real = os.scandir

    def fake(path):
        if str(path) == locked:
            raise PermissionError(13, "Permission denied", path)
        return real(path)

    monkeypatch.setattr(prober.os, "scandir", fake)
    res = calculate(str(deep_tree))

    assert res.total_bytes == 160
    assert key(deep_tree / "a" / "b" / "c" / "d") not in res.sizes
    assert "cannot list" in caplog.text
