"""Names for Ethernet frame types and IP protocol numbers."""

from __future__ import annotations

_ETHER_TYPES: dict[int, str] = {
    0x0800: "IPV4",
    0x0806: "ARP",
    0x0808: "X.25",
    0x0809: "OSPF",
    0x080C: "QNX",
    0x0810: "IPX",
    0x0816: "AppleTalk",
    0x0819: "IETF",
    0x0842: "IS-IS",
    0x0860: "LACP",
    0x086D: "IPV6",
    0x089F: "NETBEUI",
    0x08A3: "SNMP",
    0x08F0: "RARP",
    0x08F5: "DECnet",
    0x2000: "MPLS",
    0x6000: "以太网协议",
    0x8035: "RARP",
    0x8100: "802.1Q 标签",
    0x8200: "IEEE 802.1ad",
    0x86DD: "IPV6",
    0x8808: "以太网II",
    0x8809: "EAPoL",
    0x880B: "802.1x",
    0x8847: "MPLS 标签",
    0x8848: "MPLS 标签",
    0x8863: "PPPoE",
    0x8864: "PPPoE Session",
    0x8870: "AT&T协议",
    0x8871: "AT&T VPD",
    0x888E: "EAPoL",
    0x9000: "QinQ",
    0xA88A: "X.25",
    0xF000: "IEEE 802.1Q VLAN 标签",
    0xFEFE: "供应商专用",
    0xFEC0: "保留",
}

_IP_PROTOCOLS: tuple[str, ...] = (
    "HOPOPT", "ICMP", "IGMP", "GGP", "IPv4", "ST", "TCP", "CBT",
    "EGP", "IGP", "BBN-RCC-MON", "NVP-II", "PUP", "ARGUS", "EMCON", "XNET",
    "CHAOS", "UDP", "MUX", "DCN-MEAS", "HMP", "PRM", "XNS-IDP", "TRUNK-1",
    "TRUNK-2", "LEAF-1", "LEAF-2", "RDP", "IRTP", "ISO-TP4", "NETBLT", "MFE-NSP",
    "MERIT-INP", "DCCP", "3PC", "IDPR", "XTP", "DDP", "IDPR-CMTP", "TP++",
    "IL", "IPv6", "SDRP", "IPv6-Route", "IPv6-Frag", "IDRP", "RSVP", "GRE",
    "DSR", "BNA", "ESP", "AH", "I-NLSP", "SWIPE", "NARP", "Min-IPv4",
    "TLSP", "SKIP", "IPv6-ICMP", "IPv6-NoNxt", "IPv6-Opts",
    "Any host internal protocol", "CFTP", "Any local network",
    "SAT-EXPAK", "KRYPTOLAN", "RVD", "IPPC", "Any distributed file system",
    "SAT-MON", "VISA", "IPCV",
    "CPNX", "CPHB", "WSN", "PVP", "BR-SAT-MON", "SUN-ND", "WB-MON", "WB-EXPAK",
    "ISO-IP", "VMTP", "SECURE-VMTP", "VINES", "IPTM", "NSFNET-IGP", "DGP", "TCF",
    "EIGRP", "OSPFIGP", "Sprite-RPC", "LARP", "MTP", "AX.25", "IPIP", "MICP",
    "SCC-SP", "ETHERIP", "ENCAP", "Any private encryption scheme",
    "GMTP", "IFMP", "PNNI", "PIM",
    "ARIS", "SCPS", "QNX", "A/N", "IPComp", "SNP", "Compaq-Peer", "IPX-in-IP",
    "VRRP", "PGM", "Any 0-hop protocol", "L2TP", "DDX", "IATP", "STP", "SRP",
    "UTI", "SMP", "SM", "PTP", "ISIS over IPv4", "FIRE", "CRTP", "CRUDP",
    "SSCOPMCE", "IPLT", "SPS", "PIPE", "SCTP", "FC", "RSVP-E2E-IGNORE",
    "Mobility Header", "UDPLite", "MPLS-in-IP", "MANET Protocols", "HIP",
    "Shim6", "WESP", "ROHC", "Ethernet", "AGGFRAG", "NSH",
)


def ether_type_name(ether_type: int) -> str:
    """Name the EtherType value as read big-endian from a frame."""
    if not 0 <= ether_type <= 0xFFFF:
        raise ValueError(f"EtherType out of range: {ether_type}")
    return _ETHER_TYPES.get(ether_type, "Unknown")


def ip_protocol_name(number: int) -> str:
    """Name an IPv4 protocol number (0..255)."""
    if not 0 <= number <= 0xFF:
        raise ValueError(f"IP protocol number out of range: {number}")
    if number < len(_IP_PROTOCOLS):
        return _IP_PROTOCOLS[number]
    if number <= 252:
        return "Unassigned"
    if number <= 254:
        return "Experimental/Testing"
    return "Reserved"