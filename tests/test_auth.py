"""Tests for login and bearer token verification."""
import pytest
from jose import jwt

from inventory.api.deps import get_credential_verifier
from inventory.main import app
from inventory.schemas.auth import AuthPrincipal
from inventory.services.auth_service import StaticCredentialVerifier


class TestLogin:

    def test_login_success(self, client, admin_credentials, jwt_secret):
        """The fixed credential pair returns a token and the user."""
        response = client.post("/auth/login", json=admin_credentials)

        assert response.status_code == 200
        data = response.json()
        assert data["user"] == {"email": "admin@b4you.dev", "role": "admin"}

        claims = jwt.decode(data["token"], jwt_secret, algorithms=["HS256"])
        assert claims["email"] == "admin@b4you.dev"
        assert claims["role"] == "admin"
        assert claims["exp"] - claims["iat"] == 3600

    @pytest.mark.parametrize(
        "email, password",
        [
            ("admin@b4you.dev", "wrong"),
            ("other@b4you.dev", "123456"),
            ("someone@b4you.dev", "password"),
            ("admin@B4YOU.DEV", "123456"),
            (" admin@b4you.dev ", "123456"),
            ("ADMIN@b4you.dev", "123456"),
        ],
    )
    def test_login_invalid_credentials(self, client, email, password):
        """Any well-formed pair other than the exact fixed one is a 401."""
        response = client.post("/auth/login", json={"email": email, "password": password})

        assert response.status_code == 401
        assert response.json() == {"error": "Credenciais inválidas"}

    def test_login_missing_fields(self, client):
        """Missing fields are all reported together."""
        response = client.post("/auth/login", json={})

        assert response.status_code == 400
        assert response.json() == {
            "error": "Dados de entrada inválidos",
            "details": ["Email é obrigatório", "Senha é obrigatória"]
        }

    def test_login_malformed_email(self, client):
        """A syntactically invalid email is a validation error, not a credential error."""
        response = client.post("/auth/login", json={"email": "not-an-email", "password": "123456"})

        assert response.status_code == 400
        assert response.json()["details"] == ["Email inválido"]

    def test_login_with_custom_verifier(self, client):
        """The credential verifier can be swapped out."""
        principal = AuthPrincipal(email="ops@b4you.dev", role="admin")
        app.dependency_overrides[get_credential_verifier] = lambda: StaticCredentialVerifier(
            {"ops@b4you.dev": ("s3cret", principal)}
        )
        try:
            response = client.post("/auth/login", json={"email": "ops@b4you.dev", "password": "s3cret"})
        finally:
            app.dependency_overrides.pop(get_credential_verifier)

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "ops@b4you.dev"


class TestTokenVerification:

    @pytest.mark.parametrize(
        "method, path",
        [
            ("GET", "/products"),
            ("GET", "/products/1"),
            ("POST", "/products"),
            ("PUT", "/products/1"),
            ("DELETE", "/products/1"),
        ],
    )
    def test_missing_header(self, client, method, path):
        """Every product route requires the Authorization header."""
        response = client.request(method, path)

        assert response.status_code == 401
        assert response.json() == {"error": "Token de acesso requerido"}
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.parametrize("header", ["Bearer", "Basic"])
    def test_header_without_token(self, client, header):
        """A header with no token segment counts as a missing token."""
        response = client.get("/products", headers={"Authorization": header})

        assert response.status_code == 401
        assert response.json() == {"error": "Token de acesso requerido"}

    def test_non_bearer_scheme_token_is_checked(self, client):
        """Whatever the scheme, the second segment is verified as a token."""
        response = client.get("/products", headers={"Authorization": "Basic YWRtaW46MTIzNDU2"})

        assert response.status_code == 401
        assert response.json() == {"error": "Token inválido"}

    def test_non_bearer_scheme_with_valid_token(self, client, auth_token):
        response = client.get("/products", headers={"Authorization": f"Token {auth_token}"})

        assert response.status_code == 200

    def test_expired_token(self, client, token_factory):
        """An expired token gets its own message."""
        token = token_factory(expired=True)

        response = client.get("/products", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json() == {"error": "Token expirado"}

    @pytest.mark.parametrize("kind", ["malformed", "foreign_signature", "missing_email"])
    def test_invalid_token(self, client, jwt_secret, kind):
        """Malformed, foreign-signed or claim-less tokens are invalid."""
        tokens = {
            "malformed": "not-a-token",
            "foreign_signature": jwt.encode(
                {"email": "admin@b4you.dev", "role": "admin"}, "another-secret", algorithm="HS256"
            ),
            "missing_email": jwt.encode({"role": "admin"}, jwt_secret, algorithm="HS256"),
        }

        response = client.get("/products", headers={"Authorization": f"Bearer {tokens[kind]}"})

        assert response.status_code == 401
        assert response.json() == {"error": "Token inválido"}

    def test_expired_token_with_bad_signature_is_invalid(self, client):
        """Signature is checked before expiry."""
        token = jwt.encode(
            {"email": "admin@b4you.dev", "role": "admin", "iat": 0, "exp": 1},
            "another-secret",
            algorithm="HS256",
        )

        response = client.get("/products", headers={"Authorization": f"Bearer {token}"})

        assert response.json() == {"error": "Token inválido"}

    def test_auth_checked_before_validation(self, client):
        """An unauthenticated request with a bad body is a 401, not a 400."""
        response = client.post("/products", json={"price": -1})

        assert response.status_code == 401

    def test_login_then_list_products(self, client, admin_credentials):
        """A token from login opens the product routes."""
        token = client.post("/auth/login", json=admin_credentials).json()["token"]
        headers = {"Authorization": f"Bearer {token}"}
        client.post("/products", json={"name": "A", "price": 1, "category": "C"}, headers=headers)
        client.post("/products", json={"name": "B", "price": 1, "category": "C", "active": False}, headers=headers)

        response = client.get("/products", headers=headers)

        assert response.status_code == 200
        data = response.json()
        assert [p["name"] for p in data["products"]] == ["A"]
        assert data["pagination"]["total"] == 1
