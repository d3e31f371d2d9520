"""Domain logic with no I/O: exceptions, image references, reply threading, progress math."""
