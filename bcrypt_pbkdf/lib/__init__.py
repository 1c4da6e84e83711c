"""
Library modules that implement the primitives below the key derivation function.
"""
