# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Shared SigV4 test vectors.

Credentials, timestamps and expected values from the AWS Signature
Version 4 test suite (``get-vanilla`` and friends).
"""

from datetime import UTC, datetime


ACCESS_KEY_ID = "AKIDEXAMPLE"
SECRET_ACCESS_KEY = "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY"

# Suite timestamp: 2015-08-30 12:36:00 UTC
TIMESTAMP = datetime(2015, 8, 30, 12, 36, 0, tzinfo=UTC)
AMZ_DATE = "20150830T123600Z"
REGION = "us-east-1"
SERVICE = "service"
HOST = "example.amazonaws.com"
SCOPE = "20150830/us-east-1/service/aws4_request"

EMPTY_SHA256 = (
    "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
)
HELLO_SHA256 = (
    "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
)

# get-vanilla
VANILLA_CANONICAL_REQUEST = (
    "GET\n"
    "/\n"
    "\n"
    "host:example.amazonaws.com\n"
    "x-amz-date:20150830T123600Z\n"
    "\n"
    "host;x-amz-date\n"
    f"{EMPTY_SHA256}"
)
VANILLA_CANONICAL_REQUEST_HASH = (
    "bb579772317eb040ac9ed261061d46c1f17a8133879d6129b6e1c25292927e63"
)
VANILLA_SIGNATURE = (
    "5fa00fa31553b73ebf1942676e86291e8372ff2a2260956d9b8aae1d763fbf31"
)
VANILLA_AUTHORIZATION = (
    "AWS4-HMAC-SHA256 "
    f"Credential={ACCESS_KEY_ID}/{SCOPE}, "
    "SignedHeaders=host;x-amz-date, "
    f"Signature={VANILLA_SIGNATURE}"
)

# POST / with body "hello", Content-Length and X-Amz-Content-Sha256 signed
POST_HELLO_SIGNATURE = (
    "8e17c5b22b7bb28da47f44b08691c087a0993d0965bfab053376360790d44d6c"
)

# Signing key from the AWS documentation example (20120215/us-east-1/iam)
IAM_SIGNING_KEY_HEX = (
    "f4780e2d9f65fa895f9c67b32ce1baf0b0d8a43505a000a1a9e090d414db404d"
)
