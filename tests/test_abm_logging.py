"""Tests for abmcore.abm_logging."""

import logging

from abmcore import Grid, IdAllocator, World
from abmcore.abm_logging import (
    LOGGER_NAME,
    create_module_logger,
    function_logger,
    get_module_logger,
    get_rootlogger,
    method_logger,
)


def test_module_logger_names():
    """Module loggers live below the package root logger."""
    logger = create_module_logger("some.module")
    assert logger.name == f"{LOGGER_NAME}.some.module"
    assert get_module_logger("some.module") is logger
    assert create_module_logger().name == f"{LOGGER_NAME}.{__name__}"
    assert get_rootlogger().name == LOGGER_NAME


def test_method_and_function_logger(caplog):
    """The decorators trace calls at debug level."""

    class Traced:
        @method_logger(__name__)
        def run(self, value):
            return value * 2

    @function_logger(__name__)
    def double(value):
        return value * 2

    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        assert Traced().run(2) == 4
        assert double(3) == 6

    messages = [record.getMessage() for record in caplog.records]
    assert any("calling Traced.run with (2,)" in message for message in messages)
    assert any("calling double with (3,)" in message for message in messages)


def test_world_emits_debug_records(caplog):
    """Registration, removal and ticks are logged."""
    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        world = World(Grid(3, 3), rng=1, ids=IdAllocator())
        agent = world.create_agent()
        world.space.add(agent)
        world.tick()
        world.space.kill(agent)
        world.space.remove(agent)

    messages = " ".join(record.getMessage() for record in caplog.records)
    assert "calling World.__init__" in messages
    assert "registered Agent(id=0)" in messages
    assert "tick 1 done for 1 agents" in messages
    assert "marked Agent(id=0) as dead" in messages
    assert "removed Agent(id=0)" in messages
