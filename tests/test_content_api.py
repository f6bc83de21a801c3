"""
Content API Tests
=================

Public reads and admin writes for projects, services, resources and
testimonials.
"""

import copy
import re

import pytest

PROJECT = {
    "id": "brand-refresh",
    "title": "Brand Refresh",
    "category": {"lt": "Prekės ženklas", "en": "Branding"},
    "description": {"lt": "Naujas įvaizdis", "en": "A new identity"},
    "fullDescription": {"lt": "Ilgas aprašymas", "en": "Long description"},
    "challenge": {"lt": "Iššūkis", "en": "Challenge"},
    "solution": {"lt": "Sprendimas", "en": "Solution"},
    "timeline": {"lt": "6 savaitės", "en": "6 weeks"},
    "client": {
        "name": "UAB Medis",
        "testimonial": {"lt": "Puikus darbas", "en": "Great work"},
    },
    "stats": [{"label": {"lt": "Lankytojai", "en": "Visitors"}, "value": "+120%"}],
    "process": [{"step": 1, "title": {"lt": "Tyrimas", "en": "Research"}}],
    "deliverables": {"lt": ["Logotipas", "Gairės"], "en": ["Logo", "Guidelines"]},
    "technologies": {"lt": ["Figma"], "en": ["Figma"]},
    "gradient": "from-blue-500 to-purple-600",
}

SERVICE = {
    "id": "web-design",
    "iconName": "Monitor",
    "titleKey": "services.web.title",
    "descKey": "services.web.desc",
    "overview": {"lt": "Svetainių kūrimas", "en": "Website design"},
    "features": {"lt": ["Greitis"], "en": ["Speed"]},
    "benefits": {"lt": ["Daugiau klientų"], "en": ["More customers"]},
    "process": [{"title": {"lt": "Planas", "en": "Plan"}, "description": {"lt": "...", "en": "..."}}],
    "deliverables": {"lt": ["Svetainė"], "en": ["Website"]},
    "pricing": {"lt": "nuo 500 €", "en": "from €500"},
    "gradient": "from-green-400 to-teal-500",
}

RESOURCE = {
    "id": "seo-checklist",
    "title": {"lt": "SEO kontrolinis sąrašas", "en": "SEO checklist"},
    "description": {"lt": "Aprašymas", "en": "Description"},
    "fileUrl": "/uploads/downloads/1700000000000-seo.pdf",
    "fileName": "seo.pdf",
    "fileSize": "2.4 MB",
    "fileType": "PDF",
    "category": {"lt": "Gidai", "en": "Guides"},
    "thumbnail": "https://cdn.example.com/seo.png",
    "downloadCount": 7,
    "tags": ["seo", "marketing"],
}

TESTIMONIAL = {
    "name": "Ona Petraitė",
    "role": "CEO, UAB Saulė",
    "text": {"lt": "Labai rekomenduoju", "en": "Highly recommended"},
}

ENTITIES = [
    ("/api/projects", PROJECT),
    ("/api/services", SERVICE),
    ("/api/resources", RESOURCE),
]


def _without(entity, *keys):
    return {k: v for k, v in entity.items() if k not in keys}


# ---------------------------------------------------------------------------
# 1. Public reads
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("path", ["/api/projects", "/api/services", "/api/resources", "/api/testimonials"])
def test_empty_list(client, path):
    """An empty table lists as []."""
    resp = client.get(path)
    assert resp.status_code == 200
    assert resp.get_json() == []


@pytest.mark.parametrize("path", ["/api/projects", "/api/services", "/api/resources", "/api/testimonials"])
def test_get_unknown_id_404(client, path):
    resp = client.get(f"{path}/does-not-exist")
    assert resp.status_code == 404
    assert "not found" in resp.get_json()["error"]


# ---------------------------------------------------------------------------
# 2. Create -> read back
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("path,payload", ENTITIES)
def test_created_entity_is_listed(client, admin_client, path, payload):
    """POST then public GET returns the same entity."""
    resp = admin_client.post(path, json=payload)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["success"] is True
    assert _without(body["data"], "createdAt") == payload

    listed = client.get(path).get_json()
    assert len(listed) == 1
    assert _without(listed[0], "createdAt") == payload

    single = client.get(f"{path}/{payload['id']}")
    assert single.status_code == 200
    assert _without(single.get_json(), "createdAt") == payload


def test_list_newest_first(admin_client, client):
    """Projects list by creation time, newest first."""
    for slug in ("first", "second", "third"):
        assert admin_client.post("/api/projects", json={"id": slug, "title": slug}).status_code == 201

    ids = [p["id"] for p in client.get("/api/projects").get_json()]
    assert ids == ["third", "second", "first"]


def test_project_optional_fields_omitted(admin_client):
    """A project without a client or technologies omits those keys."""
    resp = admin_client.post("/api/projects", json={"id": "bare", "title": "Bare"})
    project = resp.get_json()["data"]

    assert "client" not in project
    assert "technologies" not in project
    assert project["category"] == {"lt": "", "en": ""}
    assert project["deliverables"] == {"lt": [], "en": []}
    assert project["stats"] == []


def test_project_client_without_testimonial(admin_client):
    resp = admin_client.post("/api/projects", json={"id": "c", "title": "C", "client": {"name": "UAB Upė"}})
    assert resp.get_json()["data"]["client"] == {"name": "UAB Upė"}


def test_service_defaults(admin_client):
    """Missing icon falls back to Palette and pricing is omitted."""
    resp = admin_client.post("/api/services", json={"id": "seo", "titleKey": "services.seo.title"})
    service = resp.get_json()["data"]

    assert service["iconName"] == "Palette"
    assert "pricing" not in service
    assert service["features"] == {"lt": [], "en": []}


def test_resource_defaults(admin_client):
    """Missing file metadata gets display defaults."""
    resp = admin_client.post("/api/resources", json={"id": "guide", "title": {"lt": "Gidas", "en": "Guide"}})
    resource = resp.get_json()["data"]

    assert resource["fileSize"] == "0 MB"
    assert resource["fileType"] == "PDF"
    assert resource["downloadCount"] == 0
    assert resource["tags"] == []
    assert resource["thumbnail"] is None
    assert resource["createdAt"]



def test_resource_string_tags_not_split(admin_client, client):
    """A bare string in tags is not stored as a list of characters."""
    resp = admin_client.post("/api/resources", json={**RESOURCE, "id": "tagged", "tags": "seo"})
    assert resp.status_code == 201
    assert resp.get_json()["data"]["tags"] == []
    assert client.get("/api/resources/tagged").get_json()["tags"] == []

# ---------------------------------------------------------------------------
# 3. Create validation
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("path,label", [
    ("/api/projects", "Project"),
    ("/api/services", "Service"),
    ("/api/resources", "Resource"),
])
def test_create_requires_id(admin_client, path, label):
    resp = admin_client.post(path, json={"title": "No id"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == f"{label} ID is required"


def test_create_invalid_json(admin_client):
    resp = admin_client.post("/api/projects", data="{not json", content_type="application/json")
    assert resp.status_code == 400


def test_create_duplicate_id_is_server_error(admin_client):
    """A second create with the same id is rejected by the primary key."""
    assert admin_client.post("/api/projects", json=PROJECT).status_code == 201
    resp = admin_client.post("/api/projects", json=PROJECT)
    assert resp.status_code == 500
    assert "UNIQUE" in resp.get_json()["error"]


# ---------------------------------------------------------------------------
# 4. Admin gate -- writes without a session change nothing
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("path,payload", ENTITIES)
def test_write_without_session_rejected(client, admin_client, path, payload):
    assert admin_client.post(path, json=payload).status_code == 201
    before = client.get(path).get_json()

    changed = dict(payload, gradient="changed")
    assert client.post(path, json=dict(payload, id="intruder")).status_code == 401
    assert client.put(f"{path}/{payload['id']}", json=changed).status_code == 401
    assert client.delete(f"{path}/{payload['id']}").status_code == 401

    assert client.get(path).get_json() == before


def test_bearer_token_allows_write(client, admin_headers):
    resp = client.post("/api/projects", json={"id": "via-bearer", "title": "T"}, headers=admin_headers)
    assert resp.status_code == 201


# ---------------------------------------------------------------------------
# 5. Update
# ---------------------------------------------------------------------------

def test_update_replaces_fields(client, admin_client):
    """PUT replaces the stored entity; the path id wins over the body id."""
    admin_client.post("/api/projects", json=PROJECT)

    changed = copy.deepcopy(PROJECT)
    changed["id"] = "ignored"
    changed["title"] = "Brand Refresh 2"
    changed["timeline"] = {"lt": "8 savaitės", "en": "8 weeks"}
    del changed["technologies"]

    resp = admin_client.put("/api/projects/brand-refresh", json=changed)
    assert resp.status_code == 200
    project = resp.get_json()["data"]
    assert project["id"] == "brand-refresh"
    assert project["title"] == "Brand Refresh 2"
    assert "technologies" not in project

    stored = client.get("/api/projects/brand-refresh").get_json()
    assert stored["timeline"] == {"lt": "8 savaitės", "en": "8 weeks"}
    assert client.get("/api/projects/ignored").status_code == 404


def test_update_keeps_created_at(client, admin_client):
    admin_client.post("/api/resources", json=RESOURCE)
    created_at = client.get("/api/resources/seo-checklist").get_json()["createdAt"]

    admin_client.put("/api/resources/seo-checklist", json=dict(RESOURCE, downloadCount=8))

    resource = client.get("/api/resources/seo-checklist").get_json()
    assert resource["createdAt"] == created_at
    assert resource["downloadCount"] == 8


def test_update_unknown_id_404(admin_client):
    resp = admin_client.put("/api/services/missing", json=SERVICE)
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Service not found"


# ---------------------------------------------------------------------------
# 6. Delete
# ---------------------------------------------------------------------------

def test_delete_removes_entity(client, admin_client):
    admin_client.post("/api/services", json=SERVICE)

    resp = admin_client.delete("/api/services/web-design")
    assert resp.status_code == 200
    assert resp.get_json() == {"success": True}
    assert client.get("/api/services").get_json() == []
    assert client.get("/api/services/web-design").status_code == 404


def test_delete_unknown_id_succeeds(admin_client):
    resp = admin_client.delete("/api/resources/never-existed")
    assert resp.status_code == 200
    assert resp.get_json() == {"success": True}


# ---------------------------------------------------------------------------
# 7. Testimonials -- server generated ids and required fields
# ---------------------------------------------------------------------------

def test_testimonial_id_generated(client, admin_client):
    """Client supplied ids are ignored; ids look like testimonial-<ms>-<9 chars>."""
    resp = admin_client.post("/api/testimonials", json=dict(TESTIMONIAL, id="mine"))
    assert resp.status_code == 201
    testimonial = resp.get_json()["data"]

    assert re.match(r"^testimonial-\d+-[0-9a-z]{9}$", testimonial["id"])
    assert testimonial["name"] == TESTIMONIAL["name"]
    assert testimonial["text"] == TESTIMONIAL["text"]
    assert client.get("/api/testimonials").get_json() == [testimonial]


def test_testimonial_ids_unique(admin_client):
    ids = {admin_client.post("/api/testimonials", json=TESTIMONIAL).get_json()["data"]["id"] for _ in range(5)}
    assert len(ids) == 5


@pytest.mark.parametrize("payload", [
    {"role": "CEO", "text": {"lt": "a", "en": "b"}},
    {"name": "Ona", "text": {"lt": "a", "en": "b"}},
    {"name": "Ona", "role": "CEO"},
    {"name": "Ona", "role": "CEO", "text": {"lt": "a"}},
    {"name": "Ona", "role": "CEO", "text": "plain"},
])
def test_testimonial_missing_fields(client, admin_client, payload):
    resp = admin_client.post("/api/testimonials", json=payload)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Missing required fields"
    assert client.get("/api/testimonials").get_json() == []


def test_testimonial_update_validated(admin_client):
    testimonial_id = admin_client.post("/api/testimonials", json=TESTIMONIAL).get_json()["data"]["id"]

    resp = admin_client.put(f"/api/testimonials/{testimonial_id}", json={"name": "Only name"})
    assert resp.status_code == 400

    resp = admin_client.put(f"/api/testimonials/{testimonial_id}", json=dict(TESTIMONIAL, role="CTO"))
    assert resp.status_code == 200
    assert resp.get_json()["data"]["role"] == "CTO"
