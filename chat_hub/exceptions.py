"""
Custom exception classes for the broadcast hub.

Every failure the core can observe has its own type so that session
supervisors can log and tear down precisely, without a catch-all.
"""


class EnvelopeParseError(Exception):
    """
    Inbound text payload is not a valid chat envelope.

    Raised by enrichment for non-JSON text, non-object JSON, or an object
    missing the ``name``/``message`` string fields. The frame is dropped and
    the sender is not notified.
    """

    pass


class TransportReadError(Exception):
    """
    Reading the next frame from a client transport failed.

    Ends the session's inbound loop.
    """

    pass


class TransportWriteError(Exception):
    """
    Writing a frame to a client transport failed.

    Ends the session's outbound loop; there is no retry.
    """

    pass


class DeliveryEnqueueError(Exception):
    """
    A payload could not be queued on a delivery endpoint.

    Raised when the endpoint has already been closed. The broadcast skips the
    target and removes it from the registry afterwards.
    """

    pass


class DeliveryQueueFullError(DeliveryEnqueueError):
    """
    Delivery queue is full under the ``disconnect`` overflow policy.

    The endpoint closes itself before raising, so the slow consumer is
    evicted like any other failed target.
    """

    pass
