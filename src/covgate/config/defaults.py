"""Starter .covgate.toml template."""

DEFAULT_TOML = """\
# covgate configuration
version = "1.0"

[tolerance]
general_coverage_tolerance = 0.03      # max drop of the total, in percentage points
single_line_coverage_tolerance = 5     # max drop of a single file
new_file_coverage_threshold = 40       # min statements/branches pct for new or renamed files

[exclude]
# ignored_paths = ["migrations", "src/generated/"]   # plain substrings of the file path
# file_patterns = ["\\\\.stories\\\\.tsx$", "^index\\\\.ts$"]  # regexes against the file name

[input]
base_path = "./coverage-base/coverage-summary.json"
candidate_path = "./coverage-pr/coverage-summary.json"

[output]
format = "terminal"       # terminal | json | markdown
show_summary = true

[ci]
annotation_format = "github"   # github | none
fail_on_issues = false         # exit 1 when coverage issues are found
"""
