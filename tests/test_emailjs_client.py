import json

import httpx
import pytest

from attendance_reminder.emailjs_client import EmailJSClient, EmailJSError


@pytest.mark.asyncio
async def test_send_posts_template_payload():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, text="OK")

    client = EmailJSClient("pub", "priv", transport=httpx.MockTransport(handler))
    response = await client.send("service_abc", "template_xyz", {"to_email": "a@b.com"})
    await client.close()

    assert response.status == 200
    assert response.text == "OK"
    assert captured["url"] == "https://api.emailjs.com/api/v1.0/email/send"
    assert captured["body"] == {
        "service_id": "service_abc",
        "template_id": "template_xyz",
        "user_id": "pub",
        "accessToken": "priv",
        "template_params": {"to_email": "a@b.com"},
    }


@pytest.mark.asyncio
async def test_send_raises_on_rejection():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, text="The Public Key is invalid")

    client = EmailJSClient("bad", transport=httpx.MockTransport(handler))
    with pytest.raises(EmailJSError) as excinfo:
        await client.send("service_abc", "template_xyz", {})
    await client.close()

    assert excinfo.value.status == 400
    assert excinfo.value.text == "The Public Key is invalid"
