"""API tests for product and category routes, including the access-control rules."""

import os
import unittest
from unittest.mock import patch

from support import ApiTestCase

from plantshop.core.config import get_settings

FERN = {"name": "Fern", "price": 9.99, "categoryId": 1, "imageUrl": "/img/fern.png"}

# Smallest valid PNG header is enough; contents are not inspected.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


class TestProductReads(ApiTestCase):
    def test_empty_store_lists_nothing(self) -> None:
        resp = self.client.get("/api/products")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), [])

    def test_unknown_product_is_not_found(self) -> None:
        resp = self.client.get("/api/products/42")
        self.assertEqual(resp.status_code, 404)

    def test_reads_need_no_token(self) -> None:
        admin = self.admin_token()
        created = self.client.post("/api/products", json=FERN, headers=self.bearer(admin)).json()
        resp = self.client.get(f"/api/products/{created['id']}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "Fern")


class TestProductLifecycle(ApiTestCase):
    """Admin creates, lists, deletes; the product is then gone."""

    def test_create_list_delete(self) -> None:
        admin = self.admin_token()
        resp = self.client.post("/api/products", json=FERN, headers=self.bearer(admin))
        self.assertEqual(resp.status_code, 201)

        products = self.client.get("/api/products").json()
        self.assertEqual(len(products), 1)
        product = products[0]
        self.assertEqual(product["name"], "Fern")
        self.assertAlmostEqual(product["price"], 9.99)
        self.assertEqual(product["categoryId"], 1)
        self.assertEqual(product["imageUrl"], "/img/fern.png")

        resp = self.client.delete(f"/api/products/{product['id']}", headers=self.bearer(admin))
        self.assertEqual(resp.status_code, 204)
        resp = self.client.get(f"/api/products/{product['id']}")
        self.assertEqual(resp.status_code, 404)

    def test_update_overwrites_all_fields(self) -> None:
        admin = self.admin_token()
        pid = self.client.post("/api/products", json=FERN, headers=self.bearer(admin)).json()["id"]
        new = {"name": "Cactus", "price": 4.5, "categoryId": 2, "imageUrl": "/img/cactus.png"}
        resp = self.client.put(f"/api/products/{pid}", json=new, headers=self.bearer(admin))
        self.assertEqual(resp.status_code, 200)
        got = self.client.get(f"/api/products/{pid}").json()
        self.assertEqual(
            {k: got[k] for k in new},
            new,
        )

    def test_update_requires_every_field(self) -> None:
        admin = self.admin_token()
        pid = self.client.post("/api/products", json=FERN, headers=self.bearer(admin)).json()["id"]
        resp = self.client.put(
            f"/api/products/{pid}", json={"name": "Only name"}, headers=self.bearer(admin)
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.client.get(f"/api/products/{pid}").json()["name"], "Fern")

    def test_update_rejects_blank_strings(self) -> None:
        admin = self.admin_token()
        pid = self.client.post("/api/products", json=FERN, headers=self.bearer(admin)).json()["id"]
        for blank in ({"name": "  "}, {"imageUrl": "  "}, {"price": "inf"}):
            resp = self.client.put(
                f"/api/products/{pid}", json={**FERN, **blank}, headers=self.bearer(admin)
            )
            self.assertEqual(resp.status_code, 400, blank)
        got = self.client.get(f"/api/products/{pid}").json()
        self.assertEqual(got["name"], "Fern")
        self.assertEqual(got["imageUrl"], "/img/fern.png")

    def test_update_trims_surrounding_whitespace(self) -> None:
        admin = self.admin_token()
        pid = self.client.post("/api/products", json=FERN, headers=self.bearer(admin)).json()["id"]
        self.client.put(
            f"/api/products/{pid}", json={**FERN, "name": "  Cactus "}, headers=self.bearer(admin)
        )
        self.assertEqual(self.client.get(f"/api/products/{pid}").json()["name"], "Cactus")

    def test_update_unknown_id_is_not_an_error(self) -> None:
        admin = self.admin_token()
        resp = self.client.put("/api/products/999", json=FERN, headers=self.bearer(admin))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.product_count(), 0)

    def test_delete_unknown_id_succeeds(self) -> None:
        admin = self.admin_token()
        resp = self.client.delete("/api/products/999", headers=self.bearer(admin))
        self.assertEqual(resp.status_code, 204)

    def test_category_id_is_not_checked(self) -> None:
        admin = self.admin_token()
        resp = self.client.post(
            "/api/products", json={**FERN, "categoryId": 12345}, headers=self.bearer(admin)
        )
        self.assertEqual(resp.status_code, 201)


class TestProductValidation(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.headers = self.bearer(self.admin_token())

    def test_missing_fields(self) -> None:
        for field in FERN:
            body = {k: v for k, v in FERN.items() if k != field}
            resp = self.client.post("/api/products", json=body, headers=self.headers)
            self.assertEqual(resp.status_code, 400, field)
        self.assertEqual(self.product_count(), 0)

    def test_blank_name(self) -> None:
        resp = self.client.post("/api/products", json={**FERN, "name": " "}, headers=self.headers)
        self.assertEqual(resp.status_code, 400)

    def test_negative_price(self) -> None:
        resp = self.client.post("/api/products", json={**FERN, "price": -1}, headers=self.headers)
        self.assertEqual(resp.status_code, 400)

    def test_non_numeric_price(self) -> None:
        resp = self.client.post("/api/products", json={**FERN, "price": "cheap"}, headers=self.headers)
        self.assertEqual(resp.status_code, 400)

    def test_infinite_price(self) -> None:
        for price in ("inf", "Infinity", "-inf", "nan"):
            resp = self.client.post(
                "/api/products", json={**FERN, "price": price}, headers=self.headers
            )
            self.assertEqual(resp.status_code, 400, price)
        resp = self.client.post(
            "/api/products",
            content=b'{"name": "Fern", "price": 1e400, "categoryId": 1, "imageUrl": "/a.png"}',
            headers={**self.headers, "Content-Type": "application/json"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.product_count(), 0)

    def test_price_beyond_column_range(self) -> None:
        resp = self.client.post(
            "/api/products", json={**FERN, "price": 1e12}, headers=self.headers
        )
        self.assertEqual(resp.status_code, 400)

    def test_infinite_price_in_form(self) -> None:
        resp = self.client.post(
            "/api/products",
            data={"name": "Fern", "price": "Infinity", "categoryId": "1", "imageUrl": "/a.png"},
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.product_count(), 0)

    def test_json_array_body(self) -> None:
        resp = self.client.post("/api/products", json=[FERN], headers=self.headers)
        self.assertEqual(resp.status_code, 400)

    def test_unsupported_content_type(self) -> None:
        resp = self.client.post(
            "/api/products",
            content=b"name=Fern",
            headers={**self.headers, "Content-Type": "text/plain"},
        )
        self.assertEqual(resp.status_code, 415)


class TestProductImageUpload(ApiTestCase):
    """Multipart creation: an image file is stored and served, or an imageUrl is used."""

    def setUp(self) -> None:
        super().setUp()
        self.headers = self.bearer(self.admin_token())
        self.form = {"name": "Fern", "price": "9.99", "categoryId": "1"}

    def test_uploaded_image_is_stored_and_served(self) -> None:
        resp = self.client.post(
            "/api/products",
            data=self.form,
            files={"image": ("fern.png", PNG_BYTES, "image/png")},
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 201)
        image_url = resp.json()["imageUrl"]
        self.assertTrue(image_url.startswith("/uploads/"))
        self.assertTrue(image_url.endswith(".png"))

        stored = os.path.join(get_settings().UPLOAD_DIR, image_url.rsplit("/", 1)[1])
        self.assertTrue(os.path.exists(stored))
        served = self.client.get(image_url)
        self.assertEqual(served.status_code, 200)
        self.assertEqual(served.content, PNG_BYTES)

    def test_form_with_image_url(self) -> None:
        resp = self.client.post(
            "/api/products",
            data={**self.form, "imageUrl": "https://cdn.example/fern.png"},
            files={"unused": ("note.txt", b"x", "text/plain")},
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["imageUrl"], "https://cdn.example/fern.png")

    def test_both_image_sources_rejected(self) -> None:
        resp = self.client.post(
            "/api/products",
            data={**self.form, "imageUrl": "/img/fern.png"},
            files={"image": ("fern.png", PNG_BYTES, "image/png")},
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.product_count(), 0)

    def test_no_image_rejected(self) -> None:
        resp = self.client.post(
            "/api/products",
            data=self.form,
            files={"unused": ("note.txt", b"x", "text/plain")},
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 400)

    def test_oversize_upload_rejected(self) -> None:
        before = sorted(os.listdir(get_settings().UPLOAD_DIR))
        with patch.object(get_settings(), "MAX_IMAGE_BYTES", 8):
            resp = self.client.post(
                "/api/products",
                data=self.form,
                files={"image": ("fern.png", PNG_BYTES, "image/png")},
                headers=self.headers,
            )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.product_count(), 0)
        self.assertEqual(sorted(os.listdir(get_settings().UPLOAD_DIR)), before)

    def test_unsupported_extension_rejected(self) -> None:
        resp = self.client.post(
            "/api/products",
            data=self.form,
            files={"image": ("fern.exe", b"MZ", "application/octet-stream")},
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.product_count(), 0)


class TestCategories(ApiTestCase):
    def test_user_reads_but_cannot_create(self) -> None:
        token = self.user_token("a@x.com", "pw")
        resp = self.client.get("/api/categories", headers=self.bearer(token))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), [])
        resp = self.client.post(
            "/api/categories", json={"name": "Ferns", "value": "ferns"}, headers=self.bearer(token)
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(self.category_count(), 0)

    def test_admin_create_list_delete(self) -> None:
        admin = self.bearer(self.admin_token())
        resp = self.client.post("/api/categories", json={"name": "Ferns", "value": "ferns"}, headers=admin)
        self.assertEqual(resp.status_code, 201)
        created = resp.json()
        self.assertEqual(created["name"], "Ferns")
        self.assertEqual(created["value"], "ferns")

        listed = self.client.get("/api/categories", headers=admin).json()
        self.assertEqual(listed, [created])

        resp = self.client.delete(f"/api/categories/{created['id']}", headers=admin)
        self.assertEqual(resp.status_code, 204)
        self.assertEqual(self.client.get("/api/categories", headers=admin).json(), [])

    def test_missing_value_is_bad_request(self) -> None:
        admin = self.bearer(self.admin_token())
        resp = self.client.post("/api/categories", json={"name": "Ferns"}, headers=admin)
        self.assertEqual(resp.status_code, 400)

    def test_deleting_category_keeps_its_products(self) -> None:
        admin = self.bearer(self.admin_token())
        cat = self.client.post("/api/categories", json={"name": "Ferns", "value": "ferns"}, headers=admin).json()
        self.client.post("/api/products", json={**FERN, "categoryId": cat["id"]}, headers=admin)
        self.client.delete(f"/api/categories/{cat['id']}", headers=admin)
        products = self.client.get("/api/products").json()
        self.assertEqual(len(products), 1)
        self.assertEqual(products[0]["categoryId"], cat["id"])


class TestAdminOnlyWrites(ApiTestCase):
    """Writes with a user token or no token are forbidden and change nothing."""

    def setUp(self) -> None:
        super().setUp()
        admin = self.bearer(self.admin_token())
        self.product_id = self.client.post("/api/products", json=FERN, headers=admin).json()["id"]
        self.category_id = self.client.post(
            "/api/categories", json={"name": "Ferns", "value": "ferns"}, headers=admin
        ).json()["id"]
        self.user_headers = self.bearer(self.user_token("u@x.com", "pw"))

    def _attempts(self):
        return [
            ("post", "/api/products", {"json": FERN}),
            ("put", f"/api/products/{self.product_id}", {"json": {**FERN, "name": "Hacked"}}),
            ("delete", f"/api/products/{self.product_id}", {}),
            ("post", "/api/categories", {"json": {"name": "X", "value": "x"}}),
            ("delete", f"/api/categories/{self.category_id}", {}),
        ]

    def _assert_unchanged(self) -> None:
        self.assertEqual(self.product_count(), 1)
        self.assertEqual(self.category_count(), 1)
        self.assertEqual(self.client.get(f"/api/products/{self.product_id}").json()["name"], "Fern")

    def test_user_token_forbidden(self) -> None:
        for method, url, kwargs in self._attempts():
            resp = getattr(self.client, method)(url, headers=self.user_headers, **kwargs)
            self.assertEqual(resp.status_code, 403, f"{method} {url}")
        self._assert_unchanged()

    def test_missing_token_forbidden(self) -> None:
        for method, url, kwargs in self._attempts():
            resp = getattr(self.client, method)(url, **kwargs)
            self.assertEqual(resp.status_code, 403, f"{method} {url}")
        self._assert_unchanged()

    def test_user_token_with_invalid_body_is_still_forbidden(self) -> None:
        resp = self.client.put(
            f"/api/products/{self.product_id}", json={}, headers=self.user_headers
        )
        self.assertEqual(resp.status_code, 403)


class TestHealth(ApiTestCase):
    def test_health_reports_database(self) -> None:
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")
        self.assertEqual(resp.json()["database"], "connected")


if __name__ == "__main__":
    unittest.main()
