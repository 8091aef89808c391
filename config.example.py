# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TASKWEAVE_APP_NAME": "App display name (default: taskweave).",
    "TASKWEAVE_LOG_LEVEL": "Console logging level (default: INFO).",
    "TASKWEAVE_LOG_DIR": "Directory for taskweave.log (default: .local/taskweave).",
    # Pool
    "TASKWEAVE_POOL_SIZE": "Number of worker threads (default: CPU count).",
    "TASKWEAVE_THREAD_NAME_PREFIX": "Worker thread name prefix (default: taskweave-worker).",
    "TASKWEAVE_DISPATCHER_IDLE_SECONDS": (
        "Seconds the continuation dispatcher thread stays alive without work (default: 1.0)."
    ),
    # Demo (taskweave-demo)
    "TASKWEAVE_DEMO_TASKS": "Number of sleeping tasks submitted by the demo (default: 5).",
    "TASKWEAVE_DEMO_SLEEP_SECONDS": "Sleep per demo task in seconds (default: 0.1).",
}
