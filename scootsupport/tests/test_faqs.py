from conftest import API
from scootsupport.services.faq_service import normalize_tags

def create(client, headers, **fields):
    payload = {"question": "How do I charge?", "answer": "Plug it in overnight.", **fields}
    r = client.post(f"{API}/faqs", headers=headers, json=payload)
    assert r.status_code == 200, r.text
    return r.json()["data"]

def test_normalize_tags():
    assert normalize_tags([" battery", "battery", "", "charging "]) == ["battery", "charging"]
    assert normalize_tags(None) == []

def test_create_with_defaults(client, admin_headers):
    faq = create(client, admin_headers)
    assert faq["category"] == "general"
    assert faq["is_active"] is True
    assert faq["display_order"] == 0
    assert faq["tags"] == []

def test_question_and_answer_required(client, admin_headers):
    r = client.post(f"{API}/faqs", headers=admin_headers, json={"question": "Only a question"})
    assert r.status_code == 400

def test_update_and_delete(client, admin_headers):
    faq = create(client, admin_headers, tags=["battery"])
    r = client.put(f"{API}/faqs/{faq['id']}", headers=admin_headers, json={"answer": "Use the supplied charger.", "tags": ["battery", " charging"]})
    assert r.status_code == 200
    updated = r.json()["data"]
    assert updated["answer"] == "Use the supplied charger."
    assert updated["question"] == faq["question"]
    assert updated["tags"] == ["battery", "charging"]

    r = client.get(f"{API}/faqs/{faq['id']}", headers=admin_headers)
    assert r.json()["data"]["answer"] == "Use the supplied charger."

    assert client.delete(f"{API}/faqs/{faq['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"{API}/faqs/{faq['id']}", headers=admin_headers).status_code == 404

def test_public_list_is_active_only_and_ordered(client, admin_headers):
    create(client, admin_headers, question="Third", display_order=3)
    create(client, admin_headers, question="First", display_order=1, tags=["battery"])
    create(client, admin_headers, question="Hidden", display_order=0, is_active=False)
    create(client, admin_headers, question="Second", display_order=1)

    r = client.get(f"{API}/faqs/public")
    assert r.status_code == 200
    assert [f["question"] for f in r.json()["data"]] == ["First", "Second", "Third"]

    r = client.get(f"{API}/faqs/public", params={"tag": "battery"})
    assert [f["question"] for f in r.json()["data"]] == ["First"]

    r = client.get(f"{API}/faqs", headers=admin_headers)
    assert len(r.json()["data"]) == 4

def test_tags_and_suggestions(client, admin_headers):
    create(client, admin_headers, tags=["battery", "charging"])
    create(client, admin_headers, tags=["brakes", "battery"])

    r = client.get(f"{API}/faqs/tags", headers=admin_headers)
    assert r.json()["data"] == ["battery", "brakes", "charging"]

    r = client.get(f"{API}/faqs/tags/suggest", headers=admin_headers, params={"q": "batt"})
    suggestions = [s["tag"] for s in r.json()["data"]]
    assert suggestions[0] == "battery"

def test_writes_are_admin_only(client, user_headers):
    r = client.post(f"{API}/faqs", headers=user_headers, json={"question": "q", "answer": "a"})
    assert r.status_code == 403
    assert client.get(f"{API}/faqs", headers=user_headers).status_code == 403
