import pytest

from app.categories import service
from app.errors import ConflictError, NotFoundError, ValidationError
from app.models.catalog import MaterialCategory

from conftest import make_category, make_material


def test_create_derives_slug(db):
    category = service.create_category(db, "Windows & Doors", sort_order=5)
    assert category.slug == "windows-doors"
    assert category.parent_id is None
    assert category.sort_order == 5
    assert category.is_active is True


@pytest.mark.parametrize("name", [None, "", "   "])
def test_create_requires_name(db, name):
    with pytest.raises(ValidationError):
        service.create_category(db, name)


def test_create_rejects_name_without_alphanumerics(db):
    with pytest.raises(ValidationError):
        service.create_category(db, "&&&")


def test_create_slug_collision(db):
    service.create_category(db, "Tile")
    with pytest.raises(ConflictError):
        service.create_category(db, "TILE!")


def test_create_unknown_parent(db):
    with pytest.raises(ValidationError):
        service.create_category(db, "Orphan", parent_id="missing")


def test_update_rename_regenerates_slug(db, flooring_tree):
    updated = service.update_category(db, flooring_tree["tile"].id, {"name": "Ceramic Tile"})
    assert updated.name == "Ceramic Tile"
    assert updated.slug == "ceramic-tile"


def test_update_rename_to_own_slug_is_allowed(db, flooring_tree):
    updated = service.update_category(db, flooring_tree["tile"].id, {"name": "Tile"})
    assert updated.slug == "tile"


def test_update_rename_collision(db, flooring_tree):
    with pytest.raises(ConflictError):
        service.update_category(db, flooring_tree["tile"].id, {"name": "Hardwood"})


def test_update_is_partial(db, flooring_tree):
    tile = flooring_tree["tile"]
    updated = service.update_category(db, tile.id, {"sort_order": 9})
    assert updated.sort_order == 9
    assert updated.name == "Tile"
    assert updated.parent_id == flooring_tree["flooring"].id


def test_update_missing(db):
    with pytest.raises(NotFoundError):
        service.update_category(db, "missing", {"name": "X"})


def test_reparent(db, flooring_tree):
    updated = service.update_category(db, flooring_tree["tile"].id, {"parent_id": flooring_tree["paint"].id})
    assert updated.parent_id == flooring_tree["paint"].id


def test_reparent_to_root(db, flooring_tree):
    updated = service.update_category(db, flooring_tree["tile"].id, {"parent_id": None})
    assert updated.parent_id is None


def test_reparent_to_self_rejected(db, flooring_tree):
    tile = flooring_tree["tile"]
    with pytest.raises(ValidationError):
        service.update_category(db, tile.id, {"parent_id": tile.id})


def test_reparent_under_descendant_rejected(db, flooring_tree):
    porcelain = make_category(db, "Porcelain", parent=flooring_tree["tile"])
    with pytest.raises(ValidationError):
        service.update_category(db, flooring_tree["flooring"].id, {"parent_id": porcelain.id})
    db.refresh(flooring_tree["flooring"])
    assert flooring_tree["flooring"].parent_id is None


def test_delete_leaf_hard_deletes(db, flooring_tree):
    paint_id = flooring_tree["paint"].id
    category, soft = service.delete_category(db, paint_id)
    assert category is None and soft is False
    with pytest.raises(NotFoundError):
        service.get_category(db, paint_id)


def test_delete_with_children_soft_deletes(db, flooring_tree):
    category, soft = service.delete_category(db, flooring_tree["flooring"].id)
    assert soft is True
    assert category.is_active is False
    assert service.get_category(db, flooring_tree["flooring"].id).is_active is False


def test_delete_with_materials_soft_deletes(db, flooring_tree):
    make_material(db, "Oak", flooring_tree["hardwood"])
    category, soft = service.delete_category(db, flooring_tree["hardwood"].id)
    assert soft is True
    assert db.get(MaterialCategory, flooring_tree["hardwood"].id) is not None


def test_delete_missing(db):
    with pytest.raises(NotFoundError):
        service.delete_category(db, "missing")


def test_list_order_and_tree(db, flooring_tree):
    result = service.list_categories(db)
    names = [c.name for c in result["list"]]
    assert names[:2] == ["Flooring", "Paint"]
    assert names[2:] == ["Hardwood", "Tile", "Laminate"]
    assert [n["id"] for n in result["tree"]] == [flooring_tree["flooring"].id, flooring_tree["paint"].id]
    assert len(result["tree"][0]["children"]) == 3


# HTTP

def test_api_list(client, admin_headers, flooring_tree):
    resp = client.get("/api/admin/categories", headers=admin_headers)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert len(data["list"]) == 5
    root = data["tree"][0]
    assert root["name"] == "Flooring"
    assert root["slug"] == "flooring"
    assert [c["name"] for c in root["children"]] == ["Hardwood", "Tile", "Laminate"]
    assert root["children"][0]["parentId"] == root["id"]


def test_api_create(client, admin_headers, flooring_tree):
    resp = client.post(
        "/api/admin/categories",
        json={"name": "Vinyl Plank", "parentId": flooring_tree["flooring"].id, "sortOrder": 4},
        headers=admin_headers,
    )
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["slug"] == "vinyl-plank"
    assert data["parentId"] == flooring_tree["flooring"].id
    assert data["isActive"] is True


def test_api_create_validation(client, admin_headers):
    resp = client.post("/api/admin/categories", json={}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == {"code": "VALIDATION_ERROR", "message": "name is required"}


def test_api_create_conflict(client, admin_headers, flooring_tree):
    resp = client.post("/api/admin/categories", json={"name": "Tile"}, headers=admin_headers)
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "CONFLICT"


def test_api_update_missing(client, admin_headers):
    resp = client.put("/api/admin/categories/missing", json={"name": "X"}, headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json()["error"] == {"code": "NOT_FOUND", "message": "Category not found"}


def test_api_update_cycle(client, admin_headers, flooring_tree):
    resp = client.put(
        f"/api/admin/categories/{flooring_tree['flooring'].id}",
        json={"parentId": flooring_tree["tile"].id},
        headers=admin_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


def test_api_delete_soft(client, admin_headers, flooring_tree):
    resp = client.delete(f"/api/admin/categories/{flooring_tree['flooring'].id}", headers=admin_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["meta"] == {"softDeleted": True}
    assert body["data"]["isActive"] is False


def test_api_delete_hard(client, admin_headers, flooring_tree):
    paint_id = flooring_tree["paint"].id
    resp = client.delete(f"/api/admin/categories/{paint_id}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": {"id": paint_id}}
