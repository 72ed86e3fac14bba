"""Push gateway doubles used by the notification and order tests."""

from notifications.services.push import PushResult


class RecordingPushGateway:
    sent = []

    def send(self, tokens, title, body, data=None):
        tokens = [t for t in tokens if t]
        RecordingPushGateway.sent.append(
            {"tokens": tokens, "title": title, "body": body, "data": dict(data or {})}
        )
        return PushResult(sent=len(tokens))

    @classmethod
    def reset(cls):
        cls.sent = []


class ExplodingPushGateway:
    def send(self, tokens, title, body, data=None):
        raise RuntimeError("push backend down")
