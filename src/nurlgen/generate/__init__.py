__version__ = "0.1"

from .chars import MAX_SCALAR, CharacterClass, CodePointRange, GeneratedChar, Normal, PercentEncoded, percent_encode, render, unsafe_ranges_of, weighted_choice
from .components import FRAGMENT_CHARS, PCHAR_CHARS, QUERY_CHARS, SUB_DELIMS, UNRESERVED, USERINFO_CHARS, QueryParam, UserInfo, any_scheme, fragment, http_scheme, query, query_param, query_subcomponent, segment, segment_nz, user_info, userinfo_subcomponent
from .config import DEFAULT_CONFIG, ConfigError, GeneratorConfig
from .host import DomainHost, Host, Ipv4Host, Ipv6Host, domain, domain_label, host, ipv6_host
from .ip import Hextet, Ipv4, Ipv6, TextLayout, ipv4, ipv6, ipv6_compressed_end, ipv6_compressed_middle, ipv6_compressed_start, ipv6_layout, ipv6_mapped_ipv4, ipv6_uncompressed
from .path import Path, normalize, normalize_absolute_segments, normalize_segments, path_absolute, path_rootless
from .request_line import VERBS, HttpVersion, RequestLine, request_line, request_verb, request_verb_wrong, request_verb_wrong_case, version
from .target import AbsoluteForm, AsteriskForm, Authority, AuthorityForm, OriginForm, RequestTarget, absolute_form, asterisk_form, authority, authority_form, origin_form, request_target
