"""
HTTP client for the Recipe Share API.
"""
import json
import os
from pathlib import Path

import httpx

DEFAULT_API_URL = "http://localhost:5000"
LOGIN_PATH = "/login"


class ApiError(Exception):
    def __init__(self, status_code, message):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class LoginRequired(ApiError):
    """Raised on 401; stored credentials are already cleared."""

    def __init__(self, message="Authentication required", redirect_to=LOGIN_PATH):
        super().__init__(401, message)
        self.redirect_to = redirect_to


class CredentialStore:
    # Plays the part of browser local storage: token plus the signed-in user
    def __init__(self, path=None):
        self.path = Path(path) if path else Path.home() / ".recipe_share" / "credentials.json"

    def load(self):
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as f:
            return json.load(f)

    @property
    def token(self):
        return self.load().get("token")

    @property
    def user(self):
        return self.load().get("user")

    def save(self, token, user):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump({"token": token, "user": user}, f)

    def clear(self):
        self.path.unlink(missing_ok=True)


class RecipeShareClient:
    def __init__(self, base_url=None, store=None, transport=None, timeout=10.0):
        self.store = store or CredentialStore()
        self._http = httpx.Client(
            base_url=base_url or os.environ.get("RECIPE_SHARE_API_URL", DEFAULT_API_URL),
            headers={"Content-Type": "application/json"},
            transport=transport,
            timeout=timeout,
            event_hooks={"request": [self._attach_token], "response": [self._check_auth]},
        )

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self._http.close()

    # --- hooks ---

    def _attach_token(self, request):
        token = self.store.token
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    def _check_auth(self, response):
        # Any 401, from any endpoint, signs the user out
        if response.status_code == 401:
            response.read()
            self.store.clear()
            raise LoginRequired(_error_message(response))

    def _request(self, method, path, **kwargs):
        response = self._http.request(method, path, **kwargs)
        if response.is_error:
            raise ApiError(response.status_code, _error_message(response))
        return response.json()

    # --- auth ---

    def register(self, email, password, name):
        data = self._request("POST", "/auth/register", json={"email": email, "password": password, "name": name})
        self.store.save(data["access_token"], data["user"])
        return data

    def login(self, email, password):
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.store.save(data["access_token"], data["user"])
        return data

    def logout(self):
        self.store.clear()

    # --- recipes ---

    def list_recipes(self, query=None):
        params = {"q": query} if query else {}
        return self._request("GET", "/recipes", params=params)

    def my_recipes(self):
        return self._request("GET", "/recipes/my-recipes")

    def get_recipe(self, recipe_id):
        return self._request("GET", f"/recipes/{recipe_id}")

    def create_recipe(self, data):
        return self._request("POST", "/recipes", json=data)

    def update_recipe(self, recipe_id, data):
        return self._request("PATCH", f"/recipes/{recipe_id}", json=data)

    def delete_recipe(self, recipe_id):
        return self._request("DELETE", f"/recipes/{recipe_id}")

    def rate_recipe(self, recipe_id, rating, comment=None):
        payload = {"rating": rating}
        if comment is not None:
            payload["comment"] = comment
        return self._request("POST", f"/recipes/{recipe_id}/rate", json=payload)


def _error_message(response):
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return body.get("error") or body.get("msg") or response.reason_phrase
    return response.reason_phrase
