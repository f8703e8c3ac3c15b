# slstatus

A small status monitor for Linux. It collects pieces of system information
(CPU usage, temperature, memory, battery, network, date and time, output of
shell commands and more), joins them into one status line and either prints
it to standard output or sets it as the name (`WM_NAME`) of the X root
window, where a window manager such as dwm shows it in its bar.

## Installation

```
pip install .
```

## Usage

Set the root window name continuously, once per second (needs `DISPLAY`):

```
slstatus
```

Print the status line to standard output continuously instead:

```
slstatus -s
```

Print the status line a single time and exit:

```
slstatus -1
```

Show the version and exit:

```
slstatus -v
```

Options may be combined (`-s1`) and `--` ends option parsing. Any other
option or a leftover argument prints a usage message and exits with status 1.

SIGINT or SIGTERM ends the loop after the current update; SIGUSR1 cuts the
current wait short and triggers an immediate refresh. On exit the root window
name is cleared.

The X connection is made directly over the X11 socket named by `DISPLAY`,
authenticating with an `MIT-MAGIC-COOKIE-1` entry from `XAUTHORITY` (or
`~/.Xauthority`) when one is present.

## Components

Each component takes one argument and returns a string, or `None` when no
value can be read. Failures are reported on standard error.

| Module               | Functions and classes                                                                 |
|----------------------|---------------------------------------------------------------------------------------|
| `slstatus.battery`   | `battery_perc`, `battery_state`, `battery_remaining`                                  |
| `slstatus.cpu`       | `cpu_freq`, `cpu_perc`, `CpuUsage`                                                     |
| `slstatus.disk`      | `disk_free`, `disk_perc`, `disk_total`, `disk_used`                                   |
| `slstatus.files`     | `cat`, `num_files`                                                                    |
| `slstatus.commands`  | `run_command`                                                                         |
| `slstatus.memory`    | `ram_free`, `ram_perc`, `ram_total`, `ram_used`, `swap_free`, `swap_perc`, `swap_total`, `swap_used` |
| `slstatus.network`   | `ipv4`, `ipv6`, `up`, `netspeed_rx`, `netspeed_tx`, `NetSpeed`                        |
| `slstatus.system`    | `datetime`, `hostname`, `kernel_release`, `load_avg`, `uptime`, `gid`, `uid`, `username`, `entropy`, `temp` |
| `slstatus.volume`    | `vol_perc` (OSS mixer device such as `/dev/mixer`)                                    |
| `slstatus.wifi`      | `wifi_essid`, `wifi_perc` (over nl80211 generic netlink), `rssi_to_perc`, `find_attr` |

Components that compare two readings (`cpu_perc`, `netspeed_rx`,
`netspeed_tx`) return `None` on their first call. Components reading from
`/proc` or `/sys` accept an extra path argument so they can be pointed at
other files:

```python
from slstatus.memory import ram_perc
from slstatus.battery import battery_state

ram_perc(None, "/proc/meminfo")
battery_state("BAT0", "/sys/class/power_supply")   # "+", "-", "o" or "?"
```

Sizes are printed with decimal or binary prefixes by `slstatus.util.fmt_human`:

```python
from slstatus.util import fmt_human

fmt_human(1536, 1024)   # "1.5 Ki"
fmt_human(2000, 1000)   # "2.0 k"
```

`slstatus.util` also provides `warn`, `die`, `read_text`, `read_int` and
`find_field`.

## Configuration

The status line is a list of `slstatus.config.StatusItem` entries, each
pairing a component with a format string and the argument passed to it.
`StatusItem.render` replaces `%s` with the component's value (or the
"unknown" text when it returned `None`) and `%%` with `%`.
`slstatus.config.default_items()` returns the built-in list, and
`slstatus.config` holds the update interval (`INTERVAL_MS`), the unknown text
(`UNKNOWN_STR`) and the maximum line length (`MAXLEN`).

`slstatus.cli.render_status(items, unknown, maxlen)` joins rendered items
into the final line, stopping with a warning before an item that would make
the line reach `maxlen` bytes. `slstatus.cli.parse_args` returns the pair
(print to standard output, run only once).

## What it does not do

- There is no configuration file: the line layout is changed by editing
  `default_items()` in `slstatus/config.py`.
- Readings come from Linux interfaces (`/proc`, `/sys`, OSS ioctls,
  nl80211). There are no BSD back ends; on OpenBSD and FreeBSD only
  `entropy` has a special case, returning `∞`.
- There are no keyboard indicator or keyboard layout components.