"""Terminal theme."""

from rich.theme import Theme


# Only problems stand out; metadata stays muted
TERMINAL_THEME = Theme({
    "drain.level.debug": "#6e7681",
    "drain.level.info": "white",
    "drain.level.warning": "#d29922",
    "drain.level.error": "#f85149",
    "drain.level.critical": "bold reverse #b81c1c",

    "drain.time": "dim white",
    "drain.message": "white",
    "drain.key": "#a5d6ff",
    "drain.value": "#b0b8c1",
    "drain.context": "bold #b0b8c1",
})
