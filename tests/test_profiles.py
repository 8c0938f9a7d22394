"""
Control code and device profile tests

Tests the ESC/P table, derived header sequences, YAML profile loading and
the settings that locate profiles.
"""

import pytest

from escmark.config import AppSettings, bundledProfilesDir_get
from escmark.lib.codes import ControlCodes, ESCP
from escmark.lib.profile import Profile, ProfileError, profiles_listAvailable
from escmark.lib.renderer import transpile


class TestEscpCodes:
    """Test the default ESC/P control codes"""

    def test_toggle_pairs(self):
        """Inline toggles use the ESC/P on/off pairs"""
        assert ESCP.toggle_codes("bold") == (b"\x1bE", b"\x1bF")
        assert ESCP.toggle_codes("italic") == (b"\x1b4", b"\x1b5")
        assert ESCP.toggle_codes("underline") == (b"\x1b-1", b"\x1b-0")

    def test_top_header_sequences(self):
        """Top header: separator, bold, double width, double height"""
        assert ESCP.topHeader_open() == b"\n\n\x1bE\x1bw1\x1bW1"
        assert ESCP.topHeader_close() == b"\x1bF\x1bw0\x1bW0\n"

    def test_lower_header_sequences(self):
        """Lower header: separator and double width only"""
        assert ESCP.lowerHeader_open() == b"\n\n\x1bw1"
        assert ESCP.lowerHeader_close() == b"\x1bw0\n"

    def test_default_instance_is_escp(self):
        """ControlCodes() carries the ESC/P values"""
        assert ControlCodes() == ESCP


class TestBundledProfiles:
    """Test profiles shipped with the package"""

    def test_escp_profile_matches_defaults(self):
        """The escp profile spells out the default table"""
        assert Profile("escp").codes_get() == ESCP

    def test_ansi_profile(self):
        """The ansi profile uses SGR codes and no double-size text"""
        codes = Profile("ansi").codes_get()

        assert codes.bold_on == b"\x1b[1m"
        assert codes.double_width_on == b""
        assert transpile("**x**", codes=codes) == b"\x1b[1mx\x1b[22m\n"

    def test_list_available(self):
        """Bundled profiles are listed"""
        names = profiles_listAvailable()

        assert "escp" in names
        assert "ansi" in names

    def test_config_get_dot_notation(self):
        """Nested keys are reachable with dots"""
        profile = Profile("escp")

        assert profile.config_get("codes.bold_on") == "\x1bE"
        assert profile.config_get("codes.missing", "fallback") == "fallback"
        assert profile.description_get()


class TestCustomProfiles:
    """Test loading profiles from a user directory"""

    def test_partial_override(self, tmp_path):
        """Codes not named in the profile keep ESC/P values"""
        (tmp_path / "tags.yaml").write_text('codes:\n  bold_on: "<b>"\n  bold_off: "</b>"\n')

        codes = Profile("tags", profiles_dir=str(tmp_path)).codes_get()

        assert codes.bold_on == b"<b>"
        assert codes.italic_on == ESCP.italic_on

    def test_user_dir_listed(self, tmp_path):
        """Profiles in the user directory are listed with bundled ones"""
        (tmp_path / "custom.yaml").write_text("name: custom\n")

        names = profiles_listAvailable(str(tmp_path))

        assert "custom" in names
        assert "escp" in names

    def test_empty_profile(self, tmp_path):
        """An empty file is the default table"""
        (tmp_path / "blank.yaml").write_text("")

        assert Profile("blank", profiles_dir=str(tmp_path)).codes_get() == ESCP

    def test_null_code_is_empty(self, tmp_path):
        """A null code disables that sequence"""
        (tmp_path / "plain.yaml").write_text("codes:\n  italic_on:\n  italic_off:\n")

        codes = Profile("plain", profiles_dir=str(tmp_path)).codes_get()

        assert transpile("*x*", codes=codes) == b"x\n"


class TestProfileErrors:
    """Test invalid profiles"""

    def test_unknown_profile(self):
        """Missing profile names are reported with the alternatives"""
        with pytest.raises(ProfileError, match="not found"):
            Profile("no-such-device")

    def test_unknown_code_name(self, tmp_path):
        """Misspelled code names are rejected"""
        (tmp_path / "bad.yaml").write_text('codes:\n  bald_on: "x"\n')

        with pytest.raises(ProfileError, match="unknown codes bald_on"):
            Profile("bad", profiles_dir=str(tmp_path))

    def test_invalid_yaml(self, tmp_path):
        """Unparsable YAML is a ProfileError"""
        (tmp_path / "broken.yaml").write_text("codes: [unclosed\n")

        with pytest.raises(ProfileError, match="Failed to parse"):
            Profile("broken", profiles_dir=str(tmp_path))

    def test_non_mapping(self, tmp_path):
        """A YAML list is not a profile"""
        (tmp_path / "list.yaml").write_text("- a\n- b\n")

        with pytest.raises(ProfileError, match="must be a mapping"):
            Profile("list", profiles_dir=str(tmp_path))

    def test_non_string_code(self, tmp_path):
        """Codes must be strings"""
        (tmp_path / "num.yaml").write_text("codes:\n  bold_on: 27\n")

        with pytest.raises(ProfileError, match="must be a string"):
            Profile("num", profiles_dir=str(tmp_path))


class TestSettings:
    """Test environment-driven settings"""

    def test_defaults(self, monkeypatch):
        """Defaults preserve the reference behaviour"""
        for name in ("ESCMARK_STRICT_MODE", "ESCMARK_CLOSE_AT_EOF", "ESCMARK_DEFAULT_PROFILE"):
            monkeypatch.delenv(name, raising=False)

        settings = AppSettings(_env_file=None)

        assert settings.strict_mode is False
        assert settings.close_at_eof is False
        assert settings.default_profile == "escp"

    def test_environment_override(self, monkeypatch):
        """ESCMARK_ variables override defaults"""
        monkeypatch.setenv("ESCMARK_STRICT_MODE", "true")
        monkeypatch.setenv("ESCMARK_DEFAULT_PROFILE", "ansi")

        settings = AppSettings(_env_file=None)

        assert settings.strict_mode is True
        assert settings.default_profile == "ansi"

    def test_profile_dirs_resolution(self, tmp_path):
        """Configured directory is searched first, bundled directory last"""
        dirs = AppSettings(_env_file=None, profiles_dir=str(tmp_path)).profileDirs_resolve()

        assert dirs == [tmp_path, bundledProfilesDir_get()]
        assert (dirs[-1] / "escp.yaml").is_file()

    def test_profile_dirs_override(self, tmp_path):
        """An explicit directory replaces the configured one"""
        settings = AppSettings(_env_file=None, profiles_dir="/nonexistent")

        assert settings.profileDirs_resolve(str(tmp_path)) == [tmp_path, bundledProfilesDir_get()]

    def test_profile_dirs_bundled_only(self):
        """Without configuration only the bundled directory is searched"""
        assert AppSettings(_env_file=None, profiles_dir=None).profileDirs_resolve() == [bundledProfilesDir_get()]
