import os

import pytest

from print_gallery import scanner
from print_gallery.errors import ScanError
from print_gallery.scanner import OrderedBuckets, list_entries, scan_folder


def test_ordered_buckets_flatten_sorts_keys_and_keeps_insertion_order():
    buckets = OrderedBuckets()
    buckets.add(3, [("c",)])
    buckets.add(0, [("z",)])
    buckets.add(1, [("b",)])
    buckets.add(0, [("a",)])

    assert buckets.flatten() == [("z",), ("a",), ("b",), ("c",)]
    assert len(buckets) == 4


def test_list_entries_sorted_by_name(make_tree):
    root = make_tree("f/b.png", "f/a.png", "f/c/")
    names = [(e.name, e.is_dir) for e in list_entries(root / "f")]
    assert names == [("a.png", False), ("b.png", False), ("c", True)]


def test_scan_orders_by_key(make_tree):
    root = make_tree("f/a3.png", "f/b1.png", "f/c2.png")
    assert scan_folder(root / "f") == [("b1.png",), ("c2.png",), ("a3.png",)]


def test_scan_ties_keep_listing_order(make_tree):
    root = make_tree("f/b.png", "f/a.png", "f/x1.png", "f/c.gif")
    assert scan_folder(root / "f") == [("a.png",), ("b.png",), ("c.gif",), ("x1.png",)]


def test_scan_ignores_non_images(make_tree, tmp_path):
    root = make_tree("f/a.png")
    (tmp_path / "f" / "notes.txt").write_text("hi")
    (tmp_path / "f" / "Thumbs.db").write_text("")
    assert scan_folder(root / "f") == [("a.png",)]


def test_scan_nested_folder_uses_folder_key(make_tree):
    root = make_tree(
        "f/1.png",
        "f/3.png",
        "f/2_chapter/cover.png",
        "f/2_chapter/p9.png",
    )
    assert scan_folder(root / "f") == [
        ("1.png",),
        ("2_chapter", "cover.png"),
        ("2_chapter", "p9.png"),
        ("3.png",),
    ]


def test_scan_deep_nesting_prefixes_every_level(make_tree):
    root = make_tree("f/vol1/ch2/p1.png", "f/vol1/ch1/p5.png")
    assert scan_folder(root / "f") == [
        ("vol1", "ch1", "p5.png"),
        ("vol1", "ch2", "p1.png"),
    ]


def test_scan_skips_excluded_entries(make_tree):
    root = make_tree(
        "f/__MACOSX/a.png",
        "f/sub/__MACOSX/b.png",
        "f/__MACOSX.png",
        "f/c.png",
    )
    assert scan_folder(root / "f") == [("c.png",)]


def test_scan_counts_every_image(make_tree):
    paths = [
        "f/a.jpg",
        "f/b.JPEG",
        "f/1/c.png",
        "f/1/2/d.gif",
        "f/1/2/3/e.png",
        "f/__MACOSX/ignored.png",
    ]
    root = make_tree(*paths)
    assert len(scan_folder(root / "f")) == 5


def test_scan_empty_folder_returns_empty_list(make_tree):
    root = make_tree("f/empty/", "f/__MACOSX/a.png")
    assert scan_folder(root / "f") == []


def test_scan_missing_folder_raises(tmp_path):
    with pytest.raises(ScanError) as exc:
        scan_folder(tmp_path / "missing")
    assert exc.value.path == tmp_path / "missing"


def test_scan_file_instead_of_folder_raises(make_tree):
    root = make_tree("a.png")
    with pytest.raises(ScanError):
        scan_folder(root / "a.png")


def test_scan_unreadable_subfolder_is_skipped(monkeypatch, make_tree, reporter):
    root = make_tree("f/a1.png", "f/2_bad/x.png", "f/3_good/y.png")
    bad = root / "f" / "2_bad"
    real_list_entries = scanner.list_entries

    def fake_list_entries(folder):
        if folder == bad:
            raise ScanError(folder, "Permission denied")
        return real_list_entries(folder)

    monkeypatch.setattr(scanner, "list_entries", fake_list_entries)

    assert scan_folder(root / "f", reporter=reporter) == [
        ("a1.png",),
        ("3_good", "y.png"),
    ]
    assert reporter.messages == [("Skipping", f"{bad}: Permission denied")]


def test_scan_does_not_follow_symlinked_folders(make_tree):
    root = make_tree("Book/Ch1/a.png", "Book/Other/b.png")
    folder = root / "Book" / "Ch1"
    os.symlink(folder, folder / "loop", target_is_directory=True)
    os.symlink(root / "Book" / "Other", folder / "2_other", target_is_directory=True)

    assert scan_folder(folder) == [("a.png",)]


def test_list_entries_reports_symlinked_folder_as_file(make_tree):
    root = make_tree("f/a.png", "g/")
    os.symlink(root / "g", root / "f" / "link", target_is_directory=True)

    entries = {e.name: e.is_dir for e in list_entries(root / "f")}
    assert entries == {"a.png": False, "link": False}
