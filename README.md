# domekit

Building blocks and command line tools for a small 2D game engine, usable on their own.

## Modules

- `domekit.optparse` – a getopt-style option parser with GNU long options. `Parser(argv, permute=True)` walks an argument list (`argv[0]` is the program name); `parse(optstring)` returns the next short option character, `parse_long(longopts)` returns the matching `LongOption`, and `arg()` steps over the next plain argument. Both return `None` when options run out and raise `OptionError` for an unknown option or a bad argument. `ArgType` is `NONE`, `REQUIRED` or `OPTIONAL`.
- `domekit.pairing` – the signed Szudzik pairing function: `pair(x, y)` floors both numbers and combines them into one non-negative integer; `unpair(z)` gives them back as a tuple.
- `domekit.text` – `to_lower`, `to_upper` (one-to-one case mapping, length kept), `escape_json_char(value, options)` with `JsonOptions.ESCAPE_SLASHES`, and `version_string`, which trims a tag such as `v1.2.3-4-gabcdef` to `1.2.3`.
- `domekit.logger` – `Logger(level, color, stream, logfile)` with `LogLevel` from `OFF` to `DEBUG`. `log(level, line, context)` writes `[LEVEL] [context]: line` with the text column kept aligned across calls, returns the written line (or `None` when filtered) and raises `FatalLogError` after a `FATAL` message. `set_level(name)` and `level_name()` work with level names.
- `domekit.modulemap` – `ModuleMap`, a registry of script modules with their source, foreign functions and foreign classes (`ForeignClassMethods`). Binding into an unknown or locked module, or registering a name twice, raises `ModuleMapError`.
- `domekit.taskqueue` – `TaskQueue(handler, pool_size=4, size=256)`, a bounded queue of `Task` objects run by a pool of worker threads. `push` blocks while the queue is full; `close` (or leaving a `with` block) stops the workers.
- `domekit.plugins` – `PluginCollection` holds `Plugin` objects whose optional hooks are called with the collection. `add(name, plugin)` runs the init hook, `run_hook(Hook.PRE_UPDATE)` (and the other update/draw hooks) stops at the first plugin that returns `False` or raises, raising `PluginError`; `close()` runs the shutdown hooks.
- `domekit.embed` – `encode(source, module_name)` turns a source file into C-style include text declaring a `char` array; `write_embedded` writes it to a file.
- `domekit.nest` – `create_bundle(paths, output, include_dot_files, log)` writes files and directories into a tar "egg", skipping symlinks and, unless asked, dot files.
- `domekit.fuse` – `fuse(binary_path, egg_path, output_path)` writes a binary followed by an egg and a `FusedHeader` trailer and marks the result executable; `read_fused(binary_path)` returns the appended egg, or `None` for a binary that is not fused. Problems raise `FuseError`.
- `domekit.cli` – the `domekit` command.

## Installing

```
pip install .
```

## Command line

```
domekit help nest
domekit nest -o game.egg assets main.wren
domekit fuse game.egg game
domekit embed main.wren main_module main.wren.inc
domekit-embed main.wren main_module
```

`domekit help <command>` prints the usage of `help`, `fuse`, `embed` or `nest`.
`domekit nest` writes `game.egg` unless `-o`/`--output` names another file, and takes `--include-dot-files`.
`domekit fuse` appends the egg to the running Python interpreter's executable; to fuse into another binary, call `domekit.fuse.fuse` directly.
`domekit embed` and `domekit-embed` default the array name to `wren_module_test` and the output file to the source name with `.inc` added.

## Examples

```python
from domekit.pairing import pair, unpair

z = pair(-3, 7)
assert unpair(z) == (-3, 7)
```

```python
from domekit.optparse import ArgType, LongOption, Parser

parser = Parser(["prog", "--output=game.egg", "file.txt"])
opts = [LongOption("output", "o", ArgType.REQUIRED)]
while (opt := parser.parse_long(opts)) is not None:
    print(opt.longname, parser.optarg)   # output game.egg
print(parser.arg())                      # file.txt
```

```python
from domekit.taskqueue import Task, TaskQueue

with TaskQueue(handler=lambda task: task.data.upper()) as queue:
    task = Task(type=1, data="load")
    queue.push(task)
    queue.wait_for_empty()
```

```python
from domekit.plugins import Hook, Plugin, PluginCollection

plugins = PluginCollection()
plugins.add("counter", Plugin(pre_update=lambda collection: True))
plugins.run_hook(Hook.PRE_UPDATE)
plugins.close()
```

## What this package does not do

It is not a game engine runtime: there is no window, rendering, audio, input handling or script interpreter here, and plugins are Python objects rather than loadable shared libraries. `domekit nest` only creates bundles; it does not extract them.

## Tests

```
pip install .[test]
pytest
```