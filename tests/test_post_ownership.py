import unittest
from types import SimpleNamespace
from unittest.mock import patch

from support import AppTestCase


class TestAuthorizePostEdit(unittest.TestCase):
    def setUp(self):
        patcher = patch("blogsite.services.post_service.post_repository")
        self.repository = patcher.start()
        self.addCleanup(patcher.stop)

    def test_owner_is_authorized(self):
        from blogsite.services.post_service import authorize_post_edit

        post = SimpleNamespace(id=5, author_id=1)
        self.repository.get_by_id.return_value = post

        self.assertIs(authorize_post_edit("5", 1), post)
        self.repository.get_by_id.assert_called_once_with(5)

    def test_other_user_is_forbidden(self):
        from blogsite.errors import Forbidden
        from blogsite.services.post_service import authorize_post_edit

        self.repository.get_by_id.return_value = SimpleNamespace(id=5, author_id=1)

        with self.assertRaises(Forbidden):
            authorize_post_edit("5", 2)

    def test_missing_post_is_not_found(self):
        from blogsite.errors import NotFound
        from blogsite.services.post_service import authorize_post_edit

        self.repository.get_by_id.return_value = None

        with self.assertRaises(NotFound):
            authorize_post_edit("404", 1)

    def test_malformed_id_never_reaches_repository(self):
        from blogsite.errors import ValidationError
        from blogsite.services.post_service import authorize_post_edit

        for raw in ("abc", "-1", "0", "1.5", " 7", "", None, True, "٣", "99999999999999999999", 2**63):
            with self.subTest(raw=raw):
                with self.assertRaises(ValidationError):
                    authorize_post_edit(raw, 1)

        self.assertEqual(self.repository.get_by_id.call_count, 0)


class TestEditRoutes(AppTestCase):
    def setUp(self):
        super().setUp()
        self.alice_id = self._register("alice")
        self.bob_id = self._register("bob")
        self.post_id = self._create_post(self.alice_id, "Hello", "World")

    def _as(self, user_id):
        self.client.set_cookie("token", self._token_for(user_id))

    def test_owner_sees_edit_form(self):
        self._as(self.alice_id)

        response = self.client.get(f"/edit/{self.post_id}")
        self.assertEqual(response.status_code, 200)
        blog = response.get_json()["blog"]
        self.assertEqual(blog["title"], "Hello")
        self.assertEqual(blog["author"]["username"], "alice")

    def test_owner_can_edit(self):
        self._as(self.alice_id)

        response = self.client.post(
            f"/edit/{self.post_id}",
            data={"title": "Hello again", "content": "Updated"},
        )
        self.assertRedirectsTo(response, "/")

        blog = self.client.get("/").get_json()["blogs"][0]
        self.assertEqual(blog["title"], "Hello again")
        self.assertEqual(blog["content"], "Updated")
        self.assertEqual(blog["author"]["id"], self.alice_id)

    def test_edit_replaces_image_only_when_uploaded(self):
        import io

        self._as(self.alice_id)
        self.client.post(
            f"/edit/{self.post_id}",
            data={
                "title": "With image",
                "content": "c",
                "image": (io.BytesIO(b"img"), "pic.webp", "image/webp"),
            },
            content_type="multipart/form-data",
        )
        first_image = self.client.get("/").get_json()["blogs"][0]["image"]
        self.assertIn(f"/posts/{self.alice_id}/", first_image)

        self.client.post(
            f"/edit/{self.post_id}",
            data={"title": "No new image", "content": "c"},
        )
        blog = self.client.get("/").get_json()["blogs"][0]
        self.assertEqual(blog["title"], "No new image")
        self.assertEqual(blog["image"], first_image)

    def test_other_user_gets_403_and_post_is_unchanged(self):
        self._as(self.bob_id)

        self.assertEqual(self.client.get(f"/edit/{self.post_id}").status_code, 403)
        response = self.client.post(
            f"/edit/{self.post_id}",
            data={"title": "Hacked", "content": "Hacked"},
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.get_json()["error"], "Unauthorized access")

        blog = self.client.get("/").get_json()["blogs"][0]
        self.assertEqual(blog["title"], "Hello")

    def test_missing_post_is_404(self):
        self._as(self.alice_id)

        self.assertEqual(self.client.get("/edit/9999").status_code, 404)
        response = self.client.post("/edit/9999", data={"title": "t", "content": "c"})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["error"], "Blog not found")

    def test_malformed_id_is_400_without_lookup(self):
        self._as(self.alice_id)

        with patch("blogsite.services.post_service.post_repository.get_by_id") as get_by_id:
            response = self.client.get("/edit/not-an-id")
            post_response = self.client.post("/edit/not-an-id", data={"title": "t", "content": "c"})
            oversized = self.client.get("/edit/99999999999999999999")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "Invalid Blog ID")
        self.assertEqual(post_response.status_code, 400)
        self.assertEqual(oversized.status_code, 400)
        self.assertEqual(oversized.get_json()["error"], "Invalid Blog ID")
        get_by_id.assert_not_called()

    def test_edit_requires_title_and_content(self):
        self._as(self.alice_id)

        response = self.client.post(f"/edit/{self.post_id}", data={"title": " ", "content": "c"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "Title and content are required")


if __name__ == "__main__":
    unittest.main()
