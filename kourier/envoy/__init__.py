"""Builders for Envoy clusters, endpoints, routes, virtual hosts and HTTP connection managers."""