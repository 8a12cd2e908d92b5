# xdccfetch

Building blocks for a client that fetches files from IRC XDCC bots. The
package uses only the standard library.

## Modules

- `xdccfetch.settings` holds the runtime `Config` dataclass. It comes with
  `LogLevel` (`ERR`, `QUIET`, `WARN`, `INFO`), the `Flag` bit numbers, which
  are used through `Config.set_flag`, `clear_flag` and `has_flag`, and
  `SendDelay`. The module also has these helpers:
  - `size_of(value, unit)` turns a value in `Byte` … `PByte` into a number of
    bytes.
  - `parse_transfer_speed("1MByte")` reads a speed. Anything it cannot read
    gives `NO_SPEED_LIMIT`.
  - `set_max_transfer_speed(config, value)` stores such a speed on a config.
  - `set_delay(config, value, now=None)` sets a delay before the XDCC command
    is sent.
  - `config_directory(home=None)` returns the `.xdccget` directory path, with
    a trailing path separator.
- `xdccfetch.files` has `file_exists`, `dir_exists`, `file_size`,
  `open_file(path, mode)` and `read_chunks`, which is a generator, plus
  `read_text_file`. `open_file` takes the modes `"r"`, `"w"` and `"a"`;
  `"w"` creates the file but does not truncate it. Failures raise
  `FileError`.
- `xdccfetch.output` covers console output:
  - `format_size` and `format_eta` produce strings such as `1.500 KByte` or
    `1d3h12m5s`.
  - `progress_bar` draws a bar such as `[###---]`.
  - `random_nick(length, rng=None)` makes a random nickname.
  - `terminal_columns` returns the terminal width.
  - `SpeedAverage` keeps a ring buffer of the last 8 speeds.
  - `DownloadProgress.render(columns=None)` returns one progress line.
  - `Logger` writes `[Info]`, `[Warning]` and `[Error]` lines according to
    `Config.log_level`.
- `xdccfetch.hashing` provides `create_hash_algorithm("MD5")`. It returns a
  `HashAlgorithm` with `hash_file`, `hash_string(text, iterations=1)`,
  `from_hex` and `equals`. Any other name gives `None`.
- `xdccfetch.arguments` handles the command line:
  - `build_parser()` returns an `argparse` parser for the options and for the
    three positional arguments `<server> <channel(s)> <bot cmds>`. The options
    are `-v`, `-q`, `-i`, `-c`, `-4`, `-6`, `-p`, `-d`, `-n`, `-l`,
    `--accept-all-nicks`, `--dont-confirm-offsets`, `--throttle`, `--delay`,
    `--listen-ip`, `--listen-port` and `--version`.
  - `parse_arguments(argv=None, config=None)` applies the command line to a
    `Config` and returns it. Bad input raises `ArgumentError`.
  - `parse_channels`, `parse_dcc_download` and `parse_dcc_downloads` split the
    comma-separated lists. `parse_dcc_downloads` returns `DccDownload` items.
- `xdccfetch.configfile` handles the `key=value` configuration file:
  - `default_config_content` returns the text of a new configuration file.
  - `parse_config_line` and `parse_config_string` apply lines to a `Config`.
  - `write_default_config` writes the default file.
  - `parse_config_file(config, home=None)` reads `<home>/.xdccget/config`. If
    the file does not exist, it writes the default one first.
- `xdccfetch.colors` has `convert_from_mirc`, which turns mIRC control codes
  into `[B]`, `[U]`, `[I]` and `[COLOR=...]` tags. `convert_to_mirc` does the
  reverse, and `strip_from_mirc` removes the codes.
- `xdccfetch.commands` sends parsed IRC commands to callbacks on a `Session`:
  - `get_command` looks up a command by prefix match; unmatched names give
    `UNKNOWN`.
  - `dispatch` runs a command's handler.
  - PING is answered with a PONG through `Session.send_raw`.
  - CTCP requests inside PRIVMSG become `Event.DCC_REQUEST`,
    `Event.CTCP_ACTION` or `Event.CTCP_REQ`.

## Example

```python
from xdccfetch.settings import Config, set_max_transfer_speed
from xdccfetch.arguments import parse_channels, parse_dcc_downloads
from xdccfetch.colors import strip_from_mirc
from xdccfetch.commands import Event, ParserResult, Session, dispatch

config = Config()
set_max_transfer_speed(config, "2MByte")       # config.max_transfer_speed == 2097152

channels = parse_channels("#one, #two")          # ["#one", "#two"]
downloads = parse_dcc_downloads("somebot xdcc send #42, otherbot xdcc send #7")
# downloads[0].bot_nick == "somebot", downloads[0].xdcc_cmd == "xdcc send #42"

plain = strip_from_mirc("\x02bold\x02 text")      # "bold text"

session = Session("me")
dispatch(session, "PING", ParserResult(params=["irc.example.com"]))
# session.sent == ["PONG irc.example.com"]

session.on(Event.PRIVMSG, lambda s, cmd, result: print(result.params[1]))
dispatch(session, "PRIVMSG", ParserResult(nick="somebot", params=["me", "hello"]))
```

## Configuration file

The default file lists every key that `parse_config_line` understands:

- `downloadDir`
- `logLevel`, one of `information`, `warn`, `error` or `quiet`
- `allowAllCerts`
- `verifyChecksums`
- `confirmFileOffsets`
- `maxTransferSpeed`, with the suffixes `Byte`, `KByte`, `MByte`, `GByte`,
  `TByte` or `PByte`
- `listenIp`
- `listenPort`

Empty lines and lines that start with `#` are skipped. A `listenIp` that is
not a valid IPv4 address raises `ValueError`.

## What it does not do

This package does not connect to anything. It has no IRC network client, no
reader for raw IRC lines, no DCC transfer or socket code, and no command to
install. Those pieces must come from the program that uses these modules.