# unixplay

A collection of small Unix tools built on sockets, pipes, threads and file
locks. Each tool is both a command and an importable module, so the pieces can
be reused or tested on their own.

Requires Python 3.10 or later on a POSIX system. It has no dependencies beyond
the standard library. Some tools use Unix-domain sockets, `fcntl` locking or
curses, and a few run external programs: `ls`, `dc` or a shell command.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Commands

### Stream socket services

| Command      | What it does |
|--------------|--------------|
| `timeserv [PORT]` | Time-of-day server (default port 13000). Each caller receives `The time here is ..` followed by the local time, and the server prints `Wow! got a call!`. |
| `timeclnt HOST PORT` | Connects to a time server and prints its reply. |
| `rlsd`       | Remote directory listing server on port 15000. It reads one line naming a directory, keeps only slashes and ASCII letters and digits, and sends back the output of `ls` for it. |
| `rls-client HOST DIRECTORY` | Asks a listing server for a directory and prints the listing. |
| `webserv PORT` | Minimal HTTP/1.0 server for the current directory, one thread per call. Handles `GET` only (anything else gets `501 Not Implemented`); serves files with a content type taken from the extension (`html`, `gif`, `jpg`/`jpeg`, otherwise `text/plain`), lists directories, runs files ending in `.cgi` and returns their output, answers `404 Not Found` for missing items, and answers the built-in `/status` URL with the start time, request count and bytes sent. Paths are rewritten so they stay below the current directory. |

### Datagram services

| Command    | What it does |
|------------|--------------|
| `lserv [--no-reclaim]` | License server on UDP port 2020 handing out three tickets of the form `pid.slot`. Answers `HELO pid` with `TICK ...` or `FAIL ...`, `GBYE ticket` with `THNX See ya!` or `FAIL invalid ticket`, and `VALD ticket` with `GOOD Valid ticket` or `FAIL invalid ticket`. Every 5 seconds it frees tickets held by processes that no longer exist, unless `--no-reclaim` is given. |
| `lclnt [--validate] [--host HOST] [--port PORT] [--work-time SECONDS]` | License client: obtains a ticket, "works" by sleeping (10 seconds, or twice 15 seconds with a ticket check between when `--validate` is given), then releases the ticket. |
| `dgsend HOST PORT "message"` | Sends one datagram. |
| `dgrecv PORT [--reply]` | Reports each datagram and its sender; with `--reply` it answers `Thanks for your N char message`. |
| `logfiled [--socket PATH]` | Log server on a Unix-domain datagram socket (default `/tmp/logfilesock`); prints numbered, time-stamped entries. Redirect its output to keep a log: `logfiled >> messages.log`. |
| `logfilec "a message"` | Sends a message to the log server at `/tmp/logfilesock`. |

### Processes, threads and files

| Command      | What it does |
|--------------|--------------|
| `twordcount FILE1 FILE2` | Counts words in two files, one thread per file, and prints per-file and total counts. |
| `tinybc [--command CMD]` | Reads `number op number` lines (op one of `+ - * / ^`), has `dc -` (or `CMD`) compute them over a pair of pipes, and prints the result. |
| `cmdpipe [COMMAND] [--plain] [--send TEXT]` | Runs a shell command (default `who|sort`) and prints its output with line numbers; `--plain` leaves the numbers off, `--send` writes `TEXT` to the command's input instead. |
| `file-ts FILE [--count N] [--interval SECONDS]` | Writes the current time into a file every second under an exclusive lock. |
| `file-tc FILE` | Reads the time back from that file under a shared lock. |
| `selectdemo FILE1 FILE2 SECONDS` | Watches two files for input and reports `no input after N seconds` on timeouts. |
| `threaddemo [single\|multi\|count] [--times N] [--delay SECONDS]` | Prints `hello` and `world` one after the other or from two threads, or prints a counter that another thread increments. |
| `tanimate STRING ...` | Curses animation of up to ten bouncing strings. `Q` quits, space reverses every string, a digit reverses one, `f` and `s` make them faster or slower. `tanimate --single` bounces one ` hello ` message instead. |

## Using the modules

The building blocks are plain functions and classes:

- `unixplay.socklib` — `make_server_socket`, `connect_to_server`,
  `make_dgram_server_socket`, `make_dgram_client_socket`,
  `make_internet_address`, `get_internet_address`.
- `unixplay.timeserv` — `time_message`, `serve_time`, `fetch_time`.
- `unixplay.rls` — `sanitize`, `handle_client`, `serve`, `request_listing`.
- `unixplay.webserver` — `WebServer` (`respond`, `handle`, `serve_forever`),
  `ServerStats`, `http_reply`, `sanitize`, `file_type`, `content_type`,
  `read_request`.
- `unixplay.licserver` — `TicketTable` with `issue`, `release`, `validate`
  and `reclaim`, and `LicenseServer` with `handle_request` and
  `serve_forever`.
- `unixplay.licclient` — `LicenseClient` with `transaction`, `get_ticket`,
  `validate_ticket`, `release_ticket` and `close`; usable as a context
  manager.
- `unixplay.dgtools` — `send_datagram`, `reply_text`, `format_sender`,
  `receive`.
- `unixplay.logfile` — `format_entry`, `send_log_message`, `serve_log`.
- `unixplay.wordcount` — `count_words`, `count_file`, `count_files`.
- `unixplay.tinybc` — `parse_expression`, `to_dc_program`, `DcCalculator`.
- `unixplay.cmdpipe` — `read_command`, `numbered`, `write_command`.
- `unixplay.timefile` — `locked`, `write_time`, `read_time`.
- `unixplay.selectwatch` — `watch`, a generator of `(path, data)` pairs.
- `unixplay.threaddemo` — `repeat_message`, `run_concurrently`,
  `increment_and_print`.
- `unixplay.animate` — `Bouncer`, `make_bouncers`, `apply_key`.

The ticket bookkeeping of the license server can be driven without any
network at all:

```python
from unixplay.licserver import TicketTable

table = TicketTable()
ticket = table.issue(4242)      # "4242.0"
table.validate(ticket)          # True
table.release(ticket)
```

and a word count needs nothing but text:

```python
from unixplay.wordcount import count_words

count_words("one two three\n")  # 3
```

## What it does not do

- The web server speaks only HTTP/1.0 `GET`, closes every connection after
  one reply, and has no access control; CGI programs run with the server's
  own rights.
- The license server keeps its tickets in memory only; restarting it forgets
  every ticket handed out.
- There is no shared-memory or semaphore based time service; the time is
  shared only over sockets (`timeserv`) or through a locked file (`file-ts`,
  `file-tc`).