"""Tests for the htoprc reader and writer.

Parsing tests work on in-memory text; only the read() tests touch the
filesystem.
"""

import pytest

from htopsettings.config import ConfigCodec, Settings, decode_field_id, encode_field_id
from htopsettings.config.codec import HEADER, parse_int
from htopsettings.core import LINUX_CATALOG, ProcessFlag


@pytest.fixture
def codec():
    return ConfigCodec(LINUX_CATALOG)


@pytest.fixture
def settings():
    return Settings(cpu_count=2, load=False)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestParseInt:
    """Tests for the lenient integer reader."""

    @pytest.mark.parametrize("text, expected", [
        ("15", 15),
        ("  15\n", 15),
        ("-1", -1),
        ("+3", 3),
        ("12abc", 12),
        ("abc", 0),
        ("", 0),
        ("1.5", 1),
    ])
    def test_values(self, text, expected):
        assert parse_int(text) == expected


def test_field_id_offset_inverse():
    """Test every valid id survives encode then decode."""
    for field_id in range(LINUX_CATALOG.count):
        if LINUX_CATALOG.is_valid(field_id):
            assert decode_field_id(encode_field_id(field_id)) == field_id


def test_field_id_offset_value():
    assert encode_field_id(1) == 0
    assert decode_field_id(46) == 47


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class TestParse:
    """Tests for ConfigCodec.parse()."""

    def test_ignores_bad_lines(self, codec, settings):
        before = settings.to_dict()
        codec.parse("delay=30\nthis line has no separator\nfuture_option=7\n", settings)

        after = settings.to_dict()
        assert after["delay"] == 30
        for key in before:
            if key not in ("delay", "left_meters", "left_meter_modes",
                           "right_meters", "right_meter_modes"):
                assert after[key] == before[key]

    def test_comments_and_blank_lines(self, codec, settings):
        codec.parse("# delay=99\n\n   \ndelay=20\n", settings)
        assert settings.delay == 20

    def test_crlf_line_endings(self, codec, settings):
        codec.parse("tree_view=1\r\ndelay=7\r\n", settings)
        assert settings.tree_view is True
        assert settings.delay == 7

    def test_non_numeric_value_reads_as_zero(self, codec, settings):
        codec.parse("delay=soon\nshow_program_path=yes\n", settings)
        assert settings.delay == 0
        assert settings.show_program_path is False

    def test_value_with_extra_separator(self, codec, settings):
        codec.parse("delay=12=13\n", settings)
        assert settings.delay == 12

    def test_booleans(self, codec, settings):
        codec.parse("tree_view=1\nhide_threads=2\nshow_program_path=0\n", settings)
        assert settings.tree_view is True
        assert settings.hide_threads is True
        assert settings.show_program_path is False

    @pytest.mark.parametrize("key", ["detailed_cpu_time", "expand_system_time"])
    def test_detailed_cpu_time_alias(self, codec, settings, key):
        codec.parse(f"{key}=1\n", settings)
        assert settings.detailed_cpu_time is True

    @pytest.mark.parametrize("value, expected", [("3", 3), ("6", 6), ("7", 0), ("-2", 0), ("x", 0)])
    def test_color_scheme_clamped(self, codec, settings, value, expected):
        codec.parse(f"color_scheme={value}\n", settings)
        assert settings.color_scheme == expected

    @pytest.mark.parametrize("value, expected", [("1", 1), ("-1", -1), ("0", 1), ("-5", -1)])
    def test_sort_direction(self, codec, settings, value, expected):
        codec.parse(f"sort_direction={value}\n", settings)
        assert settings.direction == expected

    def test_sort_key_offset(self, codec, settings):
        codec.parse("sort_key=0\n", settings)
        assert settings.sort_key == LINUX_CATALOG.find("PID")

    def test_sort_key_invalid_ignored(self, codec, settings):
        codec.parse("sort_key=999\n", settings)
        assert settings.sort_key == LINUX_CATALOG.default_sort_key

    def test_fields_real_file_line(self, codec, settings):
        codec.parse("fields=0 48 17 18 38 39 40 2 46 47 49 1 \n", settings)
        assert settings.fields == list(LINUX_CATALOG.default_fields)

    def test_fields_invalid_entries_dropped(self, codec, settings):
        # 8 decodes to a placeholder id, -1 to the reserved id 0
        codec.parse("fields=0 8 -1 500 46\n", settings)
        assert settings.fields == [1, 47]

    def test_fields_all_invalid_keeps_previous(self, codec, settings):
        codec.parse("fields=-1 500\n", settings)
        assert settings.fields == list(LINUX_CATALOG.default_fields)

    def test_fields_capped_at_catalog_size(self, codec, settings):
        value = " ".join(["0"] * (LINUX_CATALOG.count + 10))
        codec.parse(f"fields={value}\n", settings)
        assert len(settings.fields) == LINUX_CATALOG.count

    def test_flags_follow_fields(self, codec, settings):
        rchar = LINUX_CATALOG.find("RCHAR")
        assert not settings.flags & ProcessFlag.IO

        codec.parse(f"fields=0 {encode_field_id(rchar)}\n", settings)
        assert settings.flags & ProcessFlag.IO

    def test_no_meter_keys_uses_default_layout(self, codec):
        settings = Settings(cpu_count=12, load=False)
        codec.parse("delay=10\n", settings)

        assert settings.columns[0].names == ["LeftCPUs2", "Memory", "Swap"]
        assert settings.columns[1].names == ["RightCPUs2", "Tasks", "LoadAverage", "Uptime"]

    def test_meters_with_modes(self, codec, settings):
        codec.parse(
            "left_meters=AllCPUs Memory Swap \n"
            "left_meter_modes=1 1 2 \n"
            "right_meters=Tasks Clock \n"
            "right_meter_modes=2 4 \n",
            settings,
        )
        assert list(settings.columns[0]) == [("AllCPUs", 1), ("Memory", 1), ("Swap", 2)]
        assert list(settings.columns[1]) == [("Tasks", 2), ("Clock", 4)]

    def test_one_column_leaves_other_untouched(self, codec, settings):
        codec.parse("left_meters=Memory\nleft_meter_modes=3\n", settings)

        assert list(settings.columns[0]) == [("Memory", 3)]
        assert len(settings.columns[1]) == 0

    def test_meter_names_without_modes(self, codec, settings):
        codec.parse("right_meters=Tasks Uptime\n", settings)
        assert list(settings.columns[1]) == [("Tasks", 0), ("Uptime", 0)]

    def test_meter_modes_without_names(self, codec, settings):
        codec.parse("left_meter_modes=1 2\n", settings)
        assert len(settings.columns[0]) == 0

    def test_empty_meter_column(self, codec, settings):
        codec.parse("left_meters=\nleft_meter_modes=\nright_meters=Tasks\n", settings)
        assert len(settings.columns[0]) == 0
        assert settings.columns[1].names == ["Tasks"]


# ---------------------------------------------------------------------------
# Serializing
# ---------------------------------------------------------------------------

class TestSerialize:
    """Tests for ConfigCodec.serialize()."""

    def test_layout(self, codec):
        settings = Settings(cpu_count=2, load=False)
        codec.parse("", settings)
        text = codec.serialize(settings)

        assert text.startswith(HEADER)
        lines = text[len(HEADER):].splitlines()
        keys = [line.split("=", 1)[0] for line in lines]
        assert keys == [
            "fields", "sort_key", "sort_direction",
            "hide_threads", "hide_kernel_threads", "hide_userland_threads",
            "shadow_other_users", "show_thread_names", "show_program_path",
            "highlight_base_name", "highlight_megabytes", "highlight_threads",
            "tree_view", "header_margin", "detailed_cpu_time",
            "cpu_count_from_zero", "update_process_names", "account_guest_in_cpu_meter",
            "color_scheme", "delay",
            "left_meters", "left_meter_modes", "right_meters", "right_meter_modes",
        ]
        assert "fields=0 48 17 18 38 39 40 2 46 47 49 1 " in lines
        assert "sort_key=46" in lines
        assert "show_program_path=1" in lines
        assert "tree_view=0" in lines
        assert "delay=15" in lines
        assert "left_meters=AllCPUs Memory Swap " in lines
        assert "left_meter_modes=0 0 0 " in lines

    def test_deterministic(self, codec, settings):
        assert codec.serialize(settings) == codec.serialize(settings)

    def test_round_trip(self, codec):
        original = Settings(cpu_count=6, load=False)
        original.set_fields([
            LINUX_CATALOG.find("PID"),
            LINUX_CATALOG.find("IO_RATE"),
            LINUX_CATALOG.find("Command"),
        ])
        original.set_sort_key(LINUX_CATALOG.find("IO_RATE"))
        original.invert_sort_order()
        original.delay = 42
        original.color_scheme = 5
        for name in ("tree_view", "hide_userland_threads", "detailed_cpu_time",
                     "account_guest_in_cpu_meter", "show_program_path"):
            original.toggle(name)
        original.columns[0].assign(["LeftCPUs", "Memory"], [1, 2])
        original.columns[1].assign(["RightCPUs", "Clock", "Hostname"], [1, 4, 2])

        restored = Settings(cpu_count=1, load=False)
        codec.parse(codec.serialize(original), restored)

        assert restored.to_dict() == original.to_dict()
        assert restored.flags == original.flags

    def test_round_trip_empty_columns(self, codec, settings):
        settings.columns[0].assign([])
        settings.columns[1].assign([])

        restored = Settings(cpu_count=16, load=False)
        codec.parse(codec.serialize(settings), restored)

        assert len(restored.columns[0]) == 0
        assert len(restored.columns[1]) == 0


# ---------------------------------------------------------------------------
# File access
# ---------------------------------------------------------------------------

class TestRead:
    """Tests for ConfigCodec.read()."""

    def test_missing_file(self, codec, settings, tmp_path):
        assert codec.read(str(tmp_path / "nope"), settings) is False

    def test_directory_is_not_a_file(self, codec, settings, tmp_path):
        assert codec.read(str(tmp_path), settings) is False

    def test_invalid_utf8_only_affects_its_line(self, codec, settings, tmp_path):
        path = tmp_path / "htoprc"
        path.write_bytes(
            b"tree_view=1\n"
            b"\xff\xfe garbage\n"
            b"delay=42\n"
            b"color_scheme=\xe9\n"
            b"left_meters=Caf\xe9 Memory\n"
        )

        assert codec.read(str(path), settings) is True
        assert settings.tree_view is True
        assert settings.delay == 42
        assert settings.color_scheme == 0
        assert len(settings.columns[0]) == 2
        assert settings.columns[0].names[1] == "Memory"

    def test_reads_file(self, codec, settings, tmp_path):
        path = tmp_path / "htoprc"
        path.write_text("tree_view=1\nright_meters=Clock\n")

        assert codec.read(str(path), settings) is True
        assert settings.tree_view is True
        assert settings.columns[1].names == ["Clock"]
