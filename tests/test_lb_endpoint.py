from kourier.envoy.lb_endpoint import new_lb_endpoint


def test_new_lb_endpoint():
    ip = "127.0.0.1"
    port = 8080
    endpoint = new_lb_endpoint(ip, port)
    socket_address = endpoint["endpoint"]["address"]["socket_address"]
    assert socket_address["address"] == ip
    assert socket_address["port_value"] == port
    assert socket_address["protocol"] == "TCP"
    assert socket_address["ipv4_compat"] is True