# dover

`dover` ("do version") reports and updates the version number of a project.
It finds the version string in each file you list, checks that every file
agrees, and can show or write the next version: a major, minor or patch bump,
a move through the pre-release stages (dev, alpha, beta, rc), a build bump,
or a final release.

It needs Python 3.11 or later and has no dependencies outside the standard
library.

## Configuration

`dover` looks in the current directory for its settings, in this order, and
uses the first one that holds them:

1. `.dover`
2. `pyproject.toml`
3. `package.json`

A `.dover` file:

```toml
[dover]
version_format = "000-A.0"
versioned_files = [
    "pyproject.toml",
    "mypackage/about.py",
]
```

In `pyproject.toml` the same keys go under `[tool.dover]`. In `package.json`
they go under a top-level `"dover"` object:

```json
{
    "dover": {
        "version_format": "000+a0",
        "versioned_files": ["package.json", "src/version.js"]
    }
}
```

`versioned_files` must name at least one file, and every file must exist.
When `version_format` is missing, `000.A.0` is used.

A file may be followed by `:` and a comma-separated list of zero-based line
numbers, e.g. `"setup.cfg:2,7"`, to restrict the search to those lines.
Without line numbers, every line on which a word containing `version`,
`Version` or `VERSION` is followed by a version number is taken, for example
`version = "1.2.3"`, `VERSION: 1.2.3-beta.2` or
`__version__ = "0.1.0-a1"`. A pre-release name is only recognised when it is
separated from the numbers by `.`, `-` or `+`.

### `dover init`

`dover init` writes a starter `.dover` file (the one shown above, with an
empty file list) unless a `.dover` file already exists. The configuration is
read before any command runs, so `init` only works in a directory where a
usable configuration (for instance a `[tool.dover]` table in
`pyproject.toml`) is already present; otherwise it reports
`unable to find dover configuration`. In a fresh project, write the `.dover`
file by hand.

## Version format

`version_format` (or `--format`) is a short pattern:

```
000[-.+][(aA)[-.]0]
```

- `000` – major.minor.patch
- an optional single non-alphanumeric separator before the pre-release name
- `a` for the short name (`d`, `a`, `b`, `rc`) or `A` for the long name
  (`dev`, `alpha`, `beta`, `rc`)
- an optional separator and `0` to include the build number

With the default `000.A.0`, version `1.2.0` at the beta stage, build 3, reads
`1.2.0.beta.3`; with `000-a0` it reads `1.2.0-b3`. A version without a
pre-release is written as just `1.2.0`. A pattern that does not fit this
shape is an error.

## Usage

```
dover [--increment | --echo] [--format=<fmt>] [--verbose]
      [--major | --minor | --patch | --build]
      [--pre-release | --dev | --alpha | --beta | --rc | --release]
dover init
dover --help
dover --version
```

| Option | Meaning |
| --- | --- |
| `-i`, `--increment` | Apply the increment (rewrite the files). |
| `-e`, `--echo` | Print only the future version. |
| `-f`, `--format=<fmt>` | Use this format instead of the configured one. |
| `-M`, `--major` | Bump the major segment. |
| `-m`, `--minor` | Bump the minor segment. |
| `-p`, `--patch` | Bump the patch segment. |
| `-P`, `--pre-release` | Move to the next pre-release stage. |
| `-d`, `--dev` | Move to dev, or bump the dev build. |
| `-a`, `--alpha` | Move to alpha, or bump the alpha build. |
| `-b`, `--beta` | Move to beta, or bump the beta build. |
| `-r`, `--rc` | Move to release candidate, or bump the rc build. |
| `-B`, `--build` | Bump the pre-release build number. |
| `-R`, `--release` | Drop the pre-release part. |
| `-v`, `--verbose` | Show every file, line and version. |
| `-h`, `--help` | Show the help text. |
| `--version` | Show the dover version. |

At most one option from each of these groups may be given: increment/echo,
major/minor/patch/build, and the pre-release options. Short options may be
combined (`-im`), and long options may be shortened to any unambiguous
prefix.

Examples:

```
dover                      # print the current version
dover --verbose            # list each file, line and version found
dover --minor --alpha      # preview the changes a minor alpha bump would make
dover --echo --patch       # print the next patch version only
dover --increment --beta   # write the beta version into every file
```

With `--increment`, the version on each matched line is replaced by the new
one, written in the chosen format, and the new version is printed (or, with
`--verbose`, every change).

Moving backwards through the pre-release stages (for example from `beta` to
`alpha`) is refused. If the files do not all carry the same version, `dover`
lists them and changes nothing.

Output is coloured with ANSI escape codes. The command exits with status 0 on
success and 1 on invalid arguments or any error; for invalid arguments the
usage is printed to standard error.

## Using it from Python

The pieces behind the command can be used directly:

```python
from dover.version import Version, find_version, parse_format
from dover.config import config_values
from dover.search import get_all_version_string_matches, write_version_update

version = find_version('version = "2.0.1-rc.4"')
version.format("000-a0")                           # '2.0.1-rc4'
str(Version("1", "2", "0").bump("minor", "alpha"))  # '1.3.0-alpha.0'

cfg = config_values()                              # reads the current directory
for match in get_all_version_string_matches(cfg.files):
    print(match.file, match.line, match.version.format(cfg.format))
```

`Version.bump(part, pre_release)` takes the same names as the command line
options (`"major"`, `"build"`, `"pre-release"`, `"beta"`, `"release"`, ...)
and returns a new `Version`. Errors are raised as `dover.version.DoverError`
or one of its subclasses (`ReleaseOrderError`, `FormatError`,
`dover.config.ConfigError`).