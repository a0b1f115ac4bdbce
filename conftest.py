pytest_plugins = [
    "conf_env",
    "conf_core",
    "conf_utils",
]
