"""Mock repository factories and domain builders."""
