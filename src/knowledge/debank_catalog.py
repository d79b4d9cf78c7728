"""
DeBank chain catalog

Chain ids as accepted by the DeBank Pro API, with the wrapped native token
address used when a user asks for the chain's native token ("ETH", "BNB").
"""

DEBANK_CHAINS = [
    {"id": "eth", "name": "Ethereum", "wrapped_token_id": "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"},
    {"id": "bsc", "name": "BNB Chain", "wrapped_token_id": "0xbb4cdb9cbd36b01bd1cbaebf2de08d9173bc095c"},
    {"id": "matic", "name": "Polygon", "wrapped_token_id": "0x0d500b1d8e8ef31e21c99d1db9a6444d3adf1270"},
    {"id": "arb", "name": "Arbitrum", "wrapped_token_id": "0x82af49447d8a07e3bd95bd0d56f35241523fbab1"},
    {"id": "op", "name": "Optimism", "wrapped_token_id": "0x4200000000000000000000000000000000000006"},
    {"id": "base", "name": "Base", "wrapped_token_id": "0x4200000000000000000000000000000000000006"},
    {"id": "avax", "name": "Avalanche", "wrapped_token_id": "0xb31f66aa3c1e785363f0875a1b74e27b85fd66c7"},
    {"id": "ftm", "name": "Fantom", "wrapped_token_id": "0x21be370d5312f44cb42ce377bc9b8a0cef1a4c83"},
    {"id": "xdai", "name": "Gnosis Chain", "wrapped_token_id": "0xe91d153e0b41518a2ce8dd3d7944fa863463a97d"},
    {"id": "era", "name": "zkSync Era", "wrapped_token_id": "0x5aea5775959fbc2557cc8789bc1bf90a239d9a91"},
    {"id": "linea", "name": "Linea", "wrapped_token_id": "0xe5d7c2a44ffddf6b295a15c148167daaaf5cf34f"},
    {"id": "scrl", "name": "Scroll", "wrapped_token_id": "0x5300000000000000000000000000000000000004"},
    {"id": "mnt", "name": "Mantle", "wrapped_token_id": "0x78c1b0c915c4faa5fffa6cabf0219da63d7f4cb8"},
    {"id": "blast", "name": "Blast", "wrapped_token_id": "0x4300000000000000000000000000000000000004"},
    {"id": "cro", "name": "Cronos", "wrapped_token_id": "0x5c7f8a570d578ed84e63fdfa7b1ee72deae1ae23"},
    {"id": "celo", "name": "Celo", "wrapped_token_id": ""},
]
