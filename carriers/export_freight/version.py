"""Calculator version stamped on batch output. Bump when rates or logic change."""

VERSION = "2026.10.1"
