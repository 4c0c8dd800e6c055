from pathlib import Path

from nga_images.utils import destination_for, ensure_dir, file_exists, upgrade_image_url


class TestUpgradeImageUrl:
    def test_replaces_single_occurrence(self):
        url = "https://api.nga.gov/iiif/abc/full/!200,200/0/default.jpg"
        assert upgrade_image_url(url) == "https://api.nga.gov/iiif/abc/full/!1600,1600/0/default.jpg"

    def test_replaces_only_first_occurrence(self):
        url = "http://x/200,200/200,200/a.jpg"
        assert upgrade_image_url(url) == "http://x/1600,1600/200,200/a.jpg"

    def test_without_token_is_unchanged(self):
        url = "http://x/full/max/0/default.jpg"
        assert upgrade_image_url(url) == url

    def test_is_literal_not_pattern(self):
        # "200.200" would match a regex with an unescaped dot
        url = "http://x/200.200/a.jpg"
        assert upgrade_image_url(url) == url


def test_destination_for(tmp_path):
    assert destination_for(tmp_path, 42) == tmp_path / "42.jpg"


def test_file_exists(tmp_path):
    target = tmp_path / "1.jpg"
    assert not file_exists(target)
    target.write_bytes(b"x")
    assert file_exists(target)
    assert not file_exists(tmp_path)


def test_ensure_dir_creates_parents_and_tolerates_existing(tmp_path):
    nested = tmp_path / "a" / "b" / "c"
    assert ensure_dir(nested) == nested
    assert nested.is_dir()
    ensure_dir(Path(str(nested)))
    assert nested.is_dir()
