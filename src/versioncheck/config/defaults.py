"""Starter .versioncheck.toml template."""

DEFAULT_TOML = """\
# versioncheck configuration
# Action inputs (INPUT_*) and CLI flags override these values.

[check]
file_name = "package.json"      # manifest path, relative to the workspace
diff_search = false             # scan every commit's diff when no commit message names the version
# file_url = "::before"         # compare against a remote manifest; "::before" = manifest at the pre-push commit
# static_checking = "localIsNew"  # localIsNew | remoteIsNew: side that is newer in a static check
# assume_same_version = "new"   # old | new: force one side of the diff to equal the current version
# version_key = "version"
"""
