# examples/jwt_demo.py
# Run with: poetry run python examples/jwt_demo.py
#
# Builds and checks an HS256 JSON Web Token using only b64url and the stdlib.

import hashlib
import hmac
import time

from b64url import decode, decode_json, encode_json
from b64url.buffer import Base64URLBuffer, BytesHost, install


# =============================================================================
# Signer: takes the buffer by injection
# =============================================================================

class HS256Signer:
    """Minimal JWT signer, enough to show the codec end to end."""

    def __init__(self, secret: bytes, buffer: Base64URLBuffer):
        self.secret = secret
        self.buffer = buffer

    def sign(self, claims: dict) -> str:
        header = encode_json({"alg": "HS256", "typ": "JWT"})
        payload = encode_json(claims)
        signing_input = f"{header}.{payload}".encode("ascii")
        digest = hmac.new(self.secret, signing_input, hashlib.sha256).digest()
        return f"{header}.{payload}.{self.buffer.to_string(digest, 'base64url')}"

    def verify(self, token: str) -> dict:
        header, payload, signature = token.split(".")
        expected = hmac.new(self.secret, f"{header}.{payload}".encode("ascii"), hashlib.sha256).digest()
        if not hmac.compare_digest(expected, self.buffer.from_(signature, "base64url")):
            raise ValueError("bad signature")
        return decode_json(payload)


# =============================================================================
# DEMO
# =============================================================================

if __name__ == "__main__":
    # Explicit injection
    signer = HS256Signer(b"demo-secret", Base64URLBuffer(BytesHost()))
    token = signer.sign({"sub": "user-42", "iat": int(time.time())})
    print("Token:   ", token)
    print("Claims:  ", signer.verify(token))

    # Ambient access for code that cannot take the buffer as an argument
    ambient = install()
    header_segment = token.split(".")[0]
    print("Header:  ", ambient.from_(header_segment, "base64url").decode("utf-8"))
    print("Sig size:", len(decode(token.split(".")[2])), "bytes")

    # Tampering is detected
    forged = token[:-2] + ("AA" if not token.endswith("AA") else "BB")
    try:
        signer.verify(forged)
    except ValueError as e:
        print("Forged token rejected:", e)
