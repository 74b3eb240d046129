"""Constants shared by the parent launcher and the child bootstrap."""

# Both variables are added to the child's inherited environment.
NAME_VAR = "SELFFORK_NAME"
ARGS_VAR = "SELFFORK_ARGS"

DEFAULT_TEMP_PREFIX = "selffork_"
