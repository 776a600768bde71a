"""Game-master dice roller for mob and BBEG stat blocks."""  # noqa: N999
