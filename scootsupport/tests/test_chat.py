import openai

from conftest import API, login
from scootsupport.models.chat import ChatAnalytics, Conversation, Message
from scootsupport.services.chat_service import make_title

def send(client, headers, message, **extra):
    return client.post(f"{API}/chat/completion", headers=headers, json={"message": message, **extra})

def test_title_keeps_short_messages():
    assert make_title("My scooter won't charge") == "My scooter won't charge"
    assert make_title("x" * 50) == "x" * 50

def test_title_truncates_long_messages():
    message = "a" * 51
    assert make_title(message) == "a" * 50 + "..."

def test_first_message_creates_conversation(client, user_headers, llm, db):
    r = send(client, user_headers, "My scooter won't charge")
    assert r.status_code == 200
    body = r.json()
    assert body["response"] == llm.reply
    conversation_id = body["conversationId"]

    conversation = db.query(Conversation).one()
    assert conversation.id == conversation_id
    assert conversation.title == "My scooter won't charge"
    senders = [m.sender for m in db.query(Message).order_by(Message.id).all()]
    assert senders == ["user", "assistant"]
    assert db.query(ChatAnalytics).count() == 1
    assert len(llm.calls) == 1

def test_follow_up_reuses_conversation(client, user_headers, db):
    first = send(client, user_headers, "My scooter won't charge").json()
    second = send(client, user_headers, "It is the Model X, bought last year", conversationId=first["conversationId"])
    assert second.status_code == 200
    assert second.json()["conversationId"] == first["conversationId"]

    conversation = db.query(Conversation).one()
    assert conversation.title == "My scooter won't charge"
    assert db.query(Message).count() == 4
    assert db.query(ChatAnalytics).count() == 2

def test_prompt_carries_persona_history_window_and_new_message(client, user_headers, llm):
    conversation_id = send(client, user_headers, "message 0").json()["conversationId"]
    for i in range(1, 6):
        send(client, user_headers, f"message {i}", conversationId=conversation_id)

    messages = llm.calls[-1]["messages"]
    assert messages[0]["role"] == "system"
    assert "ScootSupport" in messages[0]["content"]
    # system + 6 history entries + the new message
    assert len(messages) == 8
    assert messages[-1] == {"role": "user", "content": "message 5"}
    assert messages[-2]["role"] == "assistant"
    assert messages[1:-1][-1]["content"] == llm.reply
    assert llm.calls[-1]["temperature"] == 0.7
    assert llm.calls[-1]["max_tokens"] == 1000

def test_file_context_reaches_system_prompt_and_analytics(client, user_headers, llm, db):
    r = send(client, user_headers, "What does this error mean?", fileContext="Error E21: battery overheat")
    assert r.status_code == 200
    system_prompt = llm.calls[0]["messages"][0]["content"]
    assert "Error E21: battery overheat" in system_prompt
    assert db.query(ChatAnalytics).one().file_processed is True

def test_missing_message_has_no_side_effects(client, user_headers, llm, db):
    for payload in ({}, {"message": "   "}):
        r = client.post(f"{API}/chat/completion", headers=user_headers, json=payload)
        assert r.status_code == 400
    assert llm.calls == []
    assert db.query(Conversation).count() == 0
    assert db.query(Message).count() == 0

def test_llm_failure_keeps_user_message(client, user_headers, llm, db):
    llm.error = openai.OpenAIError("upstream down")
    r = send(client, user_headers, "Brakes squeak")
    assert r.status_code == 502
    assert r.json()["error"]["code"] == "UPSTREAM_ERROR"
    messages = db.query(Message).all()
    assert [m.sender for m in messages] == ["user"]
    assert db.query(ChatAnalytics).count() == 0

def test_requires_authentication(client):
    assert send(client, {}, "hello").status_code == 401

def test_cannot_post_into_someone_elses_conversation(client, user_headers, db):
    conversation_id = send(client, user_headers, "hello").json()["conversationId"]
    other_headers, _ = login(client, "+15559876543")
    r = send(client, other_headers, "hijack", conversationId=conversation_id)
    assert r.status_code == 404
    assert db.query(Message).count() == 2

def test_conversation_history_routes(client, user_headers):
    first = send(client, user_headers, "Where is my order?").json()["conversationId"]
    send(client, user_headers, "Warranty question").json()

    r = client.get(f"{API}/chat/conversations", headers=user_headers)
    assert r.status_code == 200
    conversations = r.json()["conversations"]
    assert len(conversations) == 2
    assert conversations[0]["title"] == "Warranty question"
    assert conversations[1]["message_count"] == 2

    r = client.get(f"{API}/chat/conversations/{first}/messages", headers=user_headers)
    assert r.status_code == 200
    contents = [m["content"] for m in r.json()["messages"]]
    assert contents[0] == "Where is my order?"
    assert len(contents) == 2

    other_headers, _ = login(client, "+15559876543")
    r = client.get(f"{API}/chat/conversations/{first}/messages", headers=other_headers)
    assert r.status_code == 404

def test_save_direct_exchange(client, user_session, llm, db):
    headers, user = user_session
    r = client.post(f"{API}/chat/save", headers=headers, json={
        "type": "direct_save",
        "userId": user["id"],
        "question": "How long is the warranty?",
        "answer": "Two years on the frame.",
        "fileUrl": "https://files.example.com/receipt.pdf"
    })
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert llm.calls == []
    user_message = db.query(Message).filter(Message.sender == "user").one()
    assert user_message.file_url == "https://files.example.com/receipt.pdf"
    analytics = db.query(ChatAnalytics).one()
    assert analytics.response_time_ms == 0
    assert analytics.file_processed is True

def test_save_direct_exchange_for_another_user(client, user_headers):
    r = client.post(f"{API}/chat/save", headers=user_headers, json={
        "type": "direct_save",
        "userId": "someone-else",
        "question": "q",
        "answer": "a"
    })
    assert r.status_code == 403

def test_save_completion_shape(client, user_headers, llm):
    r = client.post(f"{API}/chat/save", headers=user_headers, json={
        "type": "completion",
        "message": "Can I ride in the rain?"
    })
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["response"] == llm.reply

def test_save_requires_a_type_tag(client, user_headers):
    r = client.post(f"{API}/chat/save", headers=user_headers, json={"message": "untagged"})
    assert r.status_code == 422
