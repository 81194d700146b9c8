"""Name resolution via the system resolver."""

import logging
import socket

from wakehost.resolvers.base import IPV4, IPV6, ResolvedAddress

logger = logging.getLogger(__name__)

_FAMILIES = {socket.AF_INET: IPV4, socket.AF_INET6: IPV6}


class SocketNameResolver:
    def resolve(self, host_name: str) -> list[ResolvedAddress]:
        try:
            infos = socket.getaddrinfo(host_name, None, proto=socket.IPPROTO_UDP)
        except socket.gaierror as exc:
            logger.info("DNS lookup for %s failed: %s", host_name, exc)
            return []

        seen: set[str] = set()
        results: list[ResolvedAddress] = []
        for family, _type, _proto, _canon, sockaddr in infos:
            name = _FAMILIES.get(family)
            address = sockaddr[0]
            if name is None or address in seen:
                continue
            seen.add(address)
            results.append(ResolvedAddress(address=address, family=name))
        return results
