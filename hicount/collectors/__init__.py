from .host import collect_host
from .loop import refresh_host, refresh_loop, refresh_once, sweep_and_save
