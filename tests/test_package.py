import logging

import mailab


def test_public_api_is_importable():
    for name in mailab.__all__:
        assert hasattr(mailab, name), name


def test_library_logging_is_silent_by_default():
    handlers = logging.getLogger("mailab").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)
