"""
Generate a VAPID key pair for web push.

Prints the values for VAPID_PUBLIC_KEY and VAPID_PRIVATE_KEY, both
URL-safe base64 without padding.
"""
from cryptography.hazmat.primitives import serialization
from py_vapid import Vapid
from py_vapid.utils import b64urlencode


def generate_keys():
    vapid = Vapid()
    vapid.generate_keys()

    public_key = vapid.public_key.public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.UncompressedPoint,
    )
    private_key = vapid.private_key.private_numbers().private_value.to_bytes(32, "big")

    return b64urlencode(public_key), b64urlencode(private_key)


if __name__ == "__main__":
    public_key, private_key = generate_keys()
    print(f"VAPID_PUBLIC_KEY={public_key}")
    print(f"VAPID_PRIVATE_KEY={private_key}")
