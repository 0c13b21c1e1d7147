"""Stack-effect type inference for Cat-like concatenative languages."""

version = '0.1.0'
