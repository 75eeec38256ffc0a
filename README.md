# ccstatus

A customizable status line formatter for Claude Code.

Claude Code pipes a JSON description of the current session to a status line
command. `ccstatus` reads that JSON from standard input and prints one or more
colored lines built from configurable widgets: the model name, context window
usage, token counts, cache hit rate, git branch and diff stats, session cost,
session duration, the working directory and more.

It has no dependencies beyond the Python standard library (3.10 or later).
The git widgets run the `git` command, and the `custom-command` widget runs
commands through `sh`.

## Installation

```
pip install .
```

This installs the `ccstatus` command.

## Setup

Register `ccstatus` as the status line command in Claude Code's
`settings.json` (found in `$CLAUDE_CONFIG_DIR`, or `~/.claude` by default):

```
ccstatus install
```

This sets the `statusLine` entry to
`{"type": "command", "command": "ccstatus", "padding": 0}` and creates the file
if it does not exist. To remove the entry again:

```
ccstatus uninstall
```

Both commands keep every other setting in the file. `uninstall` does nothing
when the file or the entry is missing.

## Configuration

Settings live in `settings.json` inside `$XDG_CONFIG_HOME/ccstatus`, or
`~/.config/ccstatus` when `XDG_CONFIG_HOME` is not set. When no file exists the
built-in defaults are used. To write the defaults out so you can edit them:

```
ccstatus init
```

`init` refuses to replace an existing file unless you pass `--force`. To check
that the file parses and to get a warning for each unknown widget type:

```
ccstatus validate
```

The settings are:

- `lines`: a list of lines, each a list of widget items. Every item has an
  `id` and a `type`, plus optional `color`, `backgroundColor`, `bold`,
  `prefix`, `suffix`, `character`, `rawValue`, `customText`, `commandPath`,
  `maxWidth`, `preserveColors`, `timeout` and `metadata`.
- `colorLevel`: `0` turns colors off; any higher value turns them on.
- `flexMode`: `full` (terminal width minus 10), `full-minus-40` (minus 40) or
  `full-until-compact` (minus 10, or minus 40 once the context usage reaches
  `compactThreshold` percent). Any other value uses the full width. Lines
  longer than this width are cut and end in `...`.
- `defaultSeparator`: text of `separator` widgets without a `character`
  (`|` if empty).
- `defaultPadding`: text placed between widgets.
- `inheritSeparatorColors`: separators without a color take the color of the
  widget before them.
- `overrideForegroundColor`, `overrideBackgroundColor`: one color for every
  widget.
- `globalBold`: make every widget bold.

Colors are named: `black`, `red`, `green`, `yellow`, `blue`, `magenta`,
`cyan`, `white` and their bright variants `brightBlack`, `brightRed` and so on.
Unknown names are ignored.

The terminal width is taken from standard output, standard error, `/dev/tty`
or the `COLUMNS` variable, in that order, and is 80 when none of them gives
one.

## Widgets

List every available widget with its description and default color:

```
ccstatus widgets
```

Widgets with nothing to show are left out together with their prefix and
suffix. Many widgets have a default prefix such as `In: ` or `Cost: `, used
when the item sets no `prefix` of its own. Separators at the edges of a line,
or left next to each other once empty widgets are gone, are removed.

A few widgets take extra options:

- `rawValue` switches widgets such as `model`, `session-id`, `session-cost`,
  `session-clock`, the percentage widgets and the path widgets to their raw
  form (model id, full id, unformatted numbers, full path with `~` for the
  home directory).
- `block-timer` reads `metadata.display`: `time` (default, e.g. `1h30m/5h`),
  `progress` (a bar such as `[=====>    ] 50%`) or `percentage`.
- `custom-command` runs `commandPath` with `sh -c`, gives it the session JSON
  on standard input and shows the first line of its output. `timeout` is in
  milliseconds (3 seconds by default), `maxWidth` cuts the output, and escape
  codes are removed unless `preserveColors` is set.
- `git-branch` puts `character` and a space in front of the branch name.
- `flex-separator` fills the space between the widgets before and after it,
  so those after it end at the right edge of the usable width.

## Debugging

To see exactly what Claude Code sends, use `dump` in place of the plain command.
It saves the input, pretty-printed when it is valid JSON, to
`/tmp/ccstatus-dump.json` unless `-o`/`--output` says otherwise, and still
renders the status line:

```
ccstatus dump -o session.json
```

## Running by hand

```
echo '{"model":"claude-sonnet-4-5","cost":{"total_cost_usd":0.42}}' | ccstatus
```

`ccstatus --version` prints the installed version.

## Using it from Python

```python
from ccstatus import config, status
from ccstatus.render import post_process, render_line
from ccstatus.widgets.base import RenderContext

session = status.parse('{"model": "claude-opus-4-6", "version": "1.0.80"}')
settings = config.load()
ctx = RenderContext(data=session, terminal_width=120)
for line in settings.lines:
    text = post_process(render_line(line, settings, ctx))
    if text:
        print(text)
```

New widget types can be added with `ccstatus.widgets.registry.register(name,
widget)`, where `widget` is an instance of a `ccstatus.widgets.base.Widget`
subclass that implements `render(item, ctx, settings)`.