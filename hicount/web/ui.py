from __future__ import annotations
from html import escape
from typing import Optional

from ..models import Memory, View

ONE_DAY = 24 * 60 * 60
ONE_HOUR = 60 * 60
UNKNOWN_IP = "?.?.?.?"

TEXT = """\
Say hi! {count} so far.
IP:      {ip}
OS:      {os_name}
Kernel:  {sysname} {release} {machine}
Memory:  {memory}
Uptime:  {uptime}
"""

HTML = """\
<!doctype html>
<html>
<head>
  <meta charset="utf-8"/>
  <title>Say hi</title>
  <style>
    body {{ font-family: monospace; margin: 2em; }}
    .count {{ font-size: 3em; color: #c0392b; }}
    th {{ text-align: left; padding-right: 1em; }}
  </style>
</head>
<body>
  <h1>Say hi!</h1>
  <p><span class="count">{count}</span> hellos so far.</p>
  <form method="post" action="/hi"><button type="submit">Say hi</button></form>
  <table>
    <tr><th>IP</th><td>{ip}</td></tr>
    <tr><th>OS</th><td>{os_name}</td></tr>
    <tr><th>Kernel</th><td>{sysname} {release} {machine}</td></tr>
    <tr><th>Memory</th><td>{memory}</td></tr>
    <tr><th>Uptime</th><td>{uptime}</td></tr>
  </table>
</body>
</html>
"""

def ordinal(n: int) -> str:
    if 11 <= n % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"

def format_uptime(seconds: int) -> str:
    days, rest = divmod(seconds, ONE_DAY)
    hours, rest = divmod(rest, ONE_HOUR)
    minutes = rest // 60
    parts = []
    if days: parts.append(f"{days}d")
    if hours: parts.append(f"{hours}h")
    if minutes: parts.append(f"{minutes}m")
    if not parts:
        parts.append(f"{seconds} secs")
    return " ".join(parts)

def format_bytes(n: int) -> str:
    value = float(n)
    for unit in ("B", "KiB", "MiB", "GiB"):
        if value < 1024 or unit == "GiB":
            break
        value /= 1024
    return f"{int(value)} B" if unit == "B" else f"{value:.1f} {unit}"

def format_memory(memory: Optional[Memory]) -> str:
    if memory is None:
        return "unknown"
    return f"{format_bytes(memory.free)} free of {format_bytes(memory.total)}"

def _fields(view: View) -> dict:
    host = view.host
    return {
        "count": view.hi_count,
        "ip": host.ip or UNKNOWN_IP,
        "os_name": host.os_name,
        "sysname": host.uname.sysname,
        "release": host.uname.release,
        "machine": host.uname.machine,
        "memory": format_memory(host.memory),
        "uptime": format_uptime(host.uptime),
    }

def render_text(view: View) -> str:
    return TEXT.format(**_fields(view))

def render_html(view: View) -> str:
    return HTML.format(**{k: escape(str(v)) for k, v in _fields(view).items()})

def render_hello(counted: bool, hi_count: int) -> str:
    if counted:
        return f"Hello!, you are the {ordinal(hi_count)} visitor\n"
    return f"Hello again!, you are still the {ordinal(hi_count)} visitor\n"
