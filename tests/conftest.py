from concurrent.futures import ThreadPoolExecutor

import pytest


def write(path, size):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


@pytest.fixture
def executor():
    with ThreadPoolExecutor(max_workers=4) as ex:
        yield ex


@pytest.fixture
def deep_tree(tmp_path):
    """Files at every level from 0 to 5.

    root/top.bin                 10
    root/a/a.bin                 20
    root/a/b/b.bin               30
    root/a/b/c/c.bin             40   (level 3: leaf root)
    root/a/b/c/d/e/e.bin         50
    root/x/y/z/z.bin             60   (second leaf root)
    """
    root = tmp_path / "root"
    write(root / "top.bin", 10)
    write(root / "a" / "a.bin", 20)
    write(root / "a" / "b" / "b.bin", 30)
    write(root / "a" / "b" / "c" / "c.bin", 40)
    write(root / "a" / "b" / "c" / "d" / "e" / "e.bin", 50)
    write(root / "x" / "y" / "z" / "z.bin", 60)
    return root
