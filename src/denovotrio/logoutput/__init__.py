from .calls import CallWriter, CALLS_HEADER
