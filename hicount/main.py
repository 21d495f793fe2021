from __future__ import annotations
import argparse, logging, threading

from waitress import serve

from .collectors import refresh_loop
from .config import (CFG, DEFAULT_INTERFACE, DEFAULT_MAX_AGE, DEFAULT_REFRESH_INTERVAL,
                     DEFAULT_STATE_FILE, DEFAULT_SWEEP_FACTOR, DEFAULT_THREADS, init_cfg_from_args)
from .state import Store, load_count
from .web import create_app

log = logging.getLogger("hicount")

def parse_args(argv=None):
    ap = argparse.ArgumentParser(description='Count hellos from visitors, once per address per window')
    ap.add_argument('--host', type=str, default='0.0.0.0')
    ap.add_argument('--port', type=int, default=8080)
    ap.add_argument('--interface', type=str, default=DEFAULT_INTERFACE, help='network interface whose IPv4 address is shown')
    ap.add_argument('--state-file', type=str, default=DEFAULT_STATE_FILE, help='file holding the persisted hi count')
    ap.add_argument('--max-age', type=float, default=DEFAULT_MAX_AGE, help='seconds before the same address is counted again')
    ap.add_argument('--interval', type=float, default=DEFAULT_REFRESH_INTERVAL, help='seconds between host refresh/save ticks')
    ap.add_argument('--sweep-factor', type=float, default=DEFAULT_SWEEP_FACTOR, help='forget addresses older than this many max-ages')
    ap.add_argument('--threads', type=int, default=DEFAULT_THREADS, help='request worker threads')
    ap.add_argument('--log-level', type=str, default='INFO')
    return ap.parse_args(argv)

def build(cfg: CFG) -> tuple[Store, int]:
    # anything but a missing/garbled file raises here and aborts startup
    hi_count = load_count(cfg.state_path)
    log.info("loaded state with hi count %d from %s", hi_count, cfg.state_path)
    return Store(hi_count, cfg.max_age), hi_count

def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    cfg = init_cfg_from_args(args)
    store, hi_count = build(cfg)

    t = threading.Thread(target=refresh_loop, args=(cfg, store, hi_count), name="refresh", daemon=True)
    t.start()

    app = create_app(store)
    log.info("serving on http://%s:%d with %d threads", cfg.host, cfg.port, cfg.threads)
    serve(app, host=cfg.host, port=cfg.port, threads=cfg.threads)

if __name__ == '__main__':
    main()
