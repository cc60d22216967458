"""
Compiled-in defaults for htopsettings.

These are the values a Settings object starts from before any file is
read, plus the extra overrides applied on a first run when no
configuration file exists anywhere.
"""

# Display refresh delay, in tenths of a second
DEFAULT_DELAY = 15

# Compiled-in system configuration directory
SYSCONFDIR = "/etc"

# Older releases numbered process fields from zero; files on disk still do.
FIELD_ID_OFFSET = 1

# Boolean display toggles, in the order they are written to disk
TOGGLES = (
    "hide_threads",
    "hide_kernel_threads",
    "hide_userland_threads",
    "shadow_other_users",
    "show_thread_names",
    "show_program_path",
    "highlight_base_name",
    "highlight_megabytes",
    "highlight_threads",
    "tree_view",
    "header_margin",
    "detailed_cpu_time",
    "cpu_count_from_zero",
    "update_process_names",
    "account_guest_in_cpu_meter",
)

# Older key names still accepted on read
KEY_ALIASES = {
    "expand_system_time": "detailed_cpu_time",
}

DEFAULT_TOGGLES = {name: False for name in TOGGLES}
DEFAULT_TOGGLES["show_program_path"] = True

# Applied only when neither the user nor the system file could be read
FIRST_RUN_TOGGLES = {
    "hide_kernel_threads": True,
    "highlight_megabytes": True,
    "highlight_threads": False,
    "header_margin": True,
}
