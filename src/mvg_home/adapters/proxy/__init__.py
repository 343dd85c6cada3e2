"""Proxy discovery adapters."""

from mvg_home.adapters.proxy.system_proxy_resolver import SystemProxyResolver

__all__ = ["SystemProxyResolver"]
