# chainbox

chainbox runs one or more *chains* of small processes. Each process runs in
its own thread and hands messages to the next one over a bounded channel
(`chainbox.messages.Channel`):

- an **emitter** produces a random integer between 0 and 99 every second,
- a **reader** fetches a message every second, passes it on and then commits it,
- a **filter** lets through only the messages it accepts,
- a **sender** takes every message it receives and delivers it.

Errors reported along the way go to an error observer, which logs them.
The command keeps running until it receives SIGHUP, SIGINT, SIGTERM or
SIGQUIT (those the platform has), then tells every chain to finish, waits for
the remaining messages to be handled and exits with status 0.

## Installation

```
pip install .
```

## Running

```
chainbox -c configs/dev.yaml
```

Options:

- `-c FILE` (also `-c=FILE`) — the YAML configuration file; default
  `configs/dev.yaml`, relative to the current directory
- `-d` (also `-d=true` / `-d=false`) — debug logging: the level becomes
  `debug`, whatever the configuration says, and each log line carries the
  file, line and function it came from

Flag parsing stops at the first argument that is not a flag. An unknown flag,
a missing value for `-c`, an unreadable or malformed configuration file, or
`-h` prints an error message and exits with status 3.

Stop it with Ctrl+C.

## Configuration

```yaml
logLevel: info

processesSettings:
  common:
    size: 100          # capacity of each process's output channel
  customFilterSetting:
    common:
      size: 100        # capacity of the filter's output channel
    minValue: 50       # only integers greater than this pass the filter

chains:
  - name: numbers
    processes:
      - CustomEmitter
      - CustomFilter
      - CustomSender
  - name: queue
    processes:
      - CustomReader
      - CustomSender
```

Missing keys take zero values; a channel capacity below 1 is treated as 1.

`logLevel` accepts `panic`, `fatal`, `error`, `warn`, `warning`, `info`,
`debug` and `trace` (case-insensitive); anything else, including an empty
value, falls back to `error`. Logs go to standard output.

Each chain lists its processes in order. The names recognised are
`CustomEmitter`, `CustomReader`, `CustomFilter` and `CustomSender`; names that
are not recognised are skipped. The first process should be a source, an
emitter or a reader, since it is started without an input channel. A chain
left with no recognised processes cannot be run.

## Using it from Python

```python
import threading

from chainbox.config import load_config
from chainbox.container import make_logger
from chainbox.observer import error_observer
from chainbox.processes.chain import Builder

config = load_config("configs/dev.yaml")
logger = make_logger(config.log_level, False)

stop_event = threading.Event()
observer = error_observer(logger)
observer.observe(stop_event)

builder = Builder(config.processes_settings, logger)
chains = [builder.build(chain_conf) for chain_conf in config.chains]
for chain in chains:
    chain.run(stop_event, observer.channel)

# ... later
stop_event.set()
for chain in chains:
    chain.stop(observer.channel)
observer.stop()
```

`chainbox.app.run(args, stop_signal)` does the same from command-line
arguments; when `stop_signal` is a `threading.Event`, it runs until that
event is set instead of waiting for an operating-system signal.

Your own process types derive from the classes in `chainbox.processes.base`:
override `Emitter.emit`, `Reader.fetch` and `Reader.commit`, `Filter.accept`,
or `Process.handle`. An exception raised by `Reader.fetch` is sent to the
error channel; exceptions raised while handling or committing a message are
printed and the message is dropped.

## What it does not do

The processes talk to nothing outside the program. `CustomReader` makes up
random numbers instead of reading from a queue or a service, and its commit
only logs "Commiting"; `CustomSender` logs each message instead of sending
it anywhere. No configuration file ships with the package: write one and
point `-c` at it.