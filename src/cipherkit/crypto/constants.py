"""Cryptographic constants for cipherkit."""

# AES key sizes in bytes (AES-128, AES-192, AES-256)
AES_KEY_SIZES = (16, 24, 32)
AES_DEFAULT_KEY_SIZE = 32

# AES block and CBC IV size in bytes
AES_BLOCK_SIZE = 16
AES_IV_SIZE = 16

# RSA modulus bounds (bits); size must be a multiple of RSA_KEY_SIZE_STEP
RSA_MIN_KEY_SIZE = 512
RSA_MAX_KEY_SIZE = 65536
RSA_KEY_SIZE_STEP = 64
RSA_PUBLIC_EXPONENT = 65537

# PKCS#1 v1.5 padding overhead per block in bytes
PKCS1_V15_OVERHEAD = 11

# RSA chunking is meant for keys and tokens, not bulk data
RSA_PAYLOAD_ADVISORY_SIZE = 4 * 1024
RSA_MAX_PAYLOAD_SIZE = 1024 * 1024
