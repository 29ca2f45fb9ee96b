"""Protobuf messages and gRPC stubs for the BanyanDB API."""
