"""Unit tests for bmregression.discovery."""

import pytest

from bmregression.discovery import discover
from bmregression.exceptions import CatalogUnreadable


class TestNameFilter:
    def test_empty_pattern_matches_all(self, make_case, catalog_root):
        make_case("basys3_blink")
        make_case("basys3_counter")
        make_case("zedboard_blink")
        assert set(discover(catalog_root, "", {"default"})) == {"basys3_blink", "basys3_counter", "zedboard_blink"}

    def test_substring(self, make_case, catalog_root):
        make_case("basys3_blink")
        make_case("basys3_counter")
        make_case("zedboard_blink")
        assert set(discover(catalog_root, "blink", {"default"})) == {"basys3_blink", "zedboard_blink"}

    def test_no_match(self, make_case, catalog_root):
        make_case("basys3_blink")
        assert discover(catalog_root, "counter", {"default"}) == []


class TestTagFilter:
    def test_requested_tags_intersect(self, make_case, catalog_root):
        make_case("quick_hdl", tags=["quick", "hdl"])
        make_case("slow_sim", tags=["slow"])
        make_case("untagged")

        assert set(discover(catalog_root, "", {"hdl"})) == {"quick_hdl"}
        assert set(discover(catalog_root, "", {"quick", "slow"})) == {"quick_hdl", "slow_sim"}
        assert set(discover(catalog_root, "", {"default"})) == {"untagged"}
        assert discover(catalog_root, "", {"other"}) == []

    def test_name_and_tag_combined(self, make_case, catalog_root):
        make_case("blink_quick", tags=["quick"])
        make_case("blink_slow", tags=["slow"])
        make_case("counter_quick", tags=["quick"])
        assert discover(catalog_root, "blink", {"quick"}) == ["blink_quick"]


class TestResilience:
    def test_git_directory_always_excluded(self, make_case, catalog_root):
        make_case(".git")
        make_case("basys3_blink")
        assert set(discover(catalog_root, "", {"default"})) == {"basys3_blink"}
        assert discover(catalog_root, ".git", {"default"}) == []
        assert discover(catalog_root, "git", {"default"}) == []

    def test_unloadable_cases_dropped(self, make_case, catalog_root):
        make_case("good_one")
        make_case("broken_yaml", config_text="tags: [unbalanced\n")
        (catalog_root / "no_config").mkdir()
        (catalog_root / "README.md").write_text("not a case\n")
        assert set(discover(catalog_root, "", {"default"})) == {"good_one"}

    def test_missing_required_fields_still_listed(self, make_case, catalog_root):
        """Discovery only reads tags; validation happens when the action runs."""
        make_case("partial", config_text="tags: [default]\n")
        assert discover(catalog_root, "", {"default"}) == ["partial"]

    def test_unreadable_catalog(self, tmp_path):
        with pytest.raises(CatalogUnreadable, match="cannot read regression catalog"):
            discover(tmp_path / "missing", "", {"default"})
