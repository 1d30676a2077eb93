"""
Faultline demo.

Reads SENTRY_DSN / ENVIRONMENT from the environment (empty DSN keeps
everything on the console), logs at every level, then idles until
interrupted. Ctrl-C flushes pending events and exits cleanly.

Run:
    SENTRY_DSN=... ENVIRONMENT=staging python examples/demo.py
"""

import time

from faultline.lifecycle import bootstrap, install_shutdown_hooks


def main():
    log = bootstrap()
    install_shutdown_hooks(log)

    log.info("Application started")

    log.debug("This is a debug message")
    log.info("This is an info message")
    log.warn("This is a warning message")

    log.info("User logged in", {
        "user_id": 12345,
        "action": "login",
        "ip": "192.168.1.1",
        "timestamp": int(time.time()),
    })

    log.error("This is an error - will be sent to Sentry", component="example", severity="high")

    try:
        raise ConnectionError("database connection failed")
    except ConnectionError as exc:
        log.error_with_exc(exc, "Failed to connect to database", {
            "database": "postgres",
            "host": "localhost",
            "port": 5432,
        })

    time.sleep(2)
    log.info("Application running...")

    while True:
        time.sleep(1)


if __name__ == "__main__":
    main()
