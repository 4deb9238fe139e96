"""Load-balancer endpoint resources."""

from __future__ import annotations


def new_lb_endpoint(ip: str, port: int) -> dict:
    """Create an LbEndpoint pointing at ``ip:port`` over TCP."""
    return {
        "endpoint": {
            "address": {
                "socket_address": {
                    "protocol": "TCP",
                    "address": ip,
                    "port_value": port,
                    "ipv4_compat": True,
                }
            }
        }
    }