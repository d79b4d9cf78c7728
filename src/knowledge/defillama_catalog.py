"""
DefiLlama entity catalogs

Static reference registries for the DefiLlama resolvers. Registry order is
preserved in the reference context sent to the model. Keep entries free of
the "|" delimiter where possible.
"""

PROTOCOLS = [
    {"slug": "uniswap", "name": "Uniswap", "symbol": "UNI"},
    {"slug": "uniswap-v2", "name": "Uniswap V2", "symbol": "UNI"},
    {"slug": "uniswap-v3", "name": "Uniswap V3", "symbol": "UNI"},
    {"slug": "aave", "name": "AAVE", "symbol": "AAVE"},
    {"slug": "aave-v2", "name": "Aave V2", "symbol": "AAVE"},
    {"slug": "aave-v3", "name": "Aave V3", "symbol": "AAVE"},
    {"slug": "lido", "name": "Lido", "symbol": "LDO"},
    {"slug": "makerdao", "name": "MakerDAO", "symbol": "MKR"},
    {"slug": "curve-dex", "name": "Curve DEX", "symbol": "CRV"},
    {"slug": "compound-v2", "name": "Compound V2", "symbol": "COMP"},
    {"slug": "compound-v3", "name": "Compound V3", "symbol": "COMP"},
    {"slug": "rocket-pool", "name": "Rocket Pool", "symbol": "RPL"},
    {"slug": "pancakeswap-amm", "name": "PancakeSwap AMM", "symbol": "CAKE"},
    {"slug": "pancakeswap-amm-v3", "name": "PancakeSwap AMM V3", "symbol": "CAKE"},
    {"slug": "gmx", "name": "GMX", "symbol": "GMX"},
    {"slug": "dydx", "name": "dYdX", "symbol": "DYDX"},
    {"slug": "yearn-finance", "name": "Yearn Finance", "symbol": "YFI"},
    {"slug": "beefy", "name": "Beefy", "symbol": "BIFI"},
    {"slug": "convex-finance", "name": "Convex Finance", "symbol": "CVX"},
    {"slug": "balancer-v2", "name": "Balancer V2", "symbol": "BAL"},
    {"slug": "sushiswap", "name": "SushiSwap", "symbol": "SUSHI"},
    {"slug": "eigenlayer", "name": "EigenLayer", "symbol": "EIGEN"},
    {"slug": "ethena-usde", "name": "Ethena USDe", "symbol": "ENA"},
    {"slug": "morpho-blue", "name": "Morpho Blue", "symbol": "MORPHO"},
    {"slug": "pendle", "name": "Pendle", "symbol": "PENDLE"},
    {"slug": "jito", "name": "Jito", "symbol": "JTO"},
    {"slug": "raydium", "name": "Raydium", "symbol": "RAY"},
    {"slug": "hyperliquid", "name": "Hyperliquid", "symbol": "HYPE"},
    {"slug": "spark", "name": "Spark", "symbol": "SPK"},
    {"slug": "stargate", "name": "Stargate", "symbol": "STG"},
]

CHAINS = [
    {"name": "Ethereum", "tokenSymbol": "ETH", "gecko_id": "ethereum"},
    {"name": "BSC", "tokenSymbol": "BNB", "gecko_id": "binancecoin"},
    {"name": "Solana", "tokenSymbol": "SOL", "gecko_id": "solana"},
    {"name": "Tron", "tokenSymbol": "TRX", "gecko_id": "tron"},
    {"name": "Arbitrum", "tokenSymbol": "ARB", "gecko_id": "arbitrum"},
    {"name": "Base", "tokenSymbol": "", "gecko_id": ""},
    {"name": "Polygon", "tokenSymbol": "POL", "gecko_id": "matic-network"},
    {"name": "Avalanche", "tokenSymbol": "AVAX", "gecko_id": "avalanche-2"},
    {"name": "OP Mainnet", "tokenSymbol": "OP", "gecko_id": "optimism"},
    {"name": "Sui", "tokenSymbol": "SUI", "gecko_id": "sui"},
    {"name": "Aptos", "tokenSymbol": "APT", "gecko_id": "aptos"},
    {"name": "Fantom", "tokenSymbol": "FTM", "gecko_id": "fantom"},
    {"name": "Linea", "tokenSymbol": "", "gecko_id": ""},
    {"name": "Mantle", "tokenSymbol": "MNT", "gecko_id": "mantle"},
    {"name": "Scroll", "tokenSymbol": "SCR", "gecko_id": "scroll"},
    {"name": "Blast", "tokenSymbol": "BLAST", "gecko_id": "blast"},
    {"name": "zkSync Era", "tokenSymbol": "ZK", "gecko_id": "zksync"},
    {"name": "Gnosis", "tokenSymbol": "GNO", "gecko_id": "gnosis"},
    {"name": "Cronos", "tokenSymbol": "CRO", "gecko_id": "crypto-com-chain"},
    {"name": "Bitcoin", "tokenSymbol": "BTC", "gecko_id": "bitcoin"},
]

STABLECOINS = [
    {"id": "1", "name": "Tether", "symbol": "USDT"},
    {"id": "2", "name": "USD Coin", "symbol": "USDC"},
    {"id": "3", "name": "TerraClassicUSD", "symbol": "USTC"},
    {"id": "4", "name": "Binance USD", "symbol": "BUSD"},
    {"id": "5", "name": "Dai", "symbol": "DAI"},
    {"id": "6", "name": "Frax", "symbol": "FRAX"},
    {"id": "7", "name": "TrueUSD", "symbol": "TUSD"},
    {"id": "8", "name": "Liquity USD", "symbol": "LUSD"},
    {"id": "9", "name": "Fei USD", "symbol": "FEI"},
    {"id": "10", "name": "Magic Internet Money", "symbol": "MIM"},
    {"id": "11", "name": "Pax Dollar", "symbol": "USDP"},
    {"id": "12", "name": "Neutrino USD", "symbol": "USDN"},
    {"id": "13", "name": "YUSD Stablecoin", "symbol": "YUSD"},
    {"id": "14", "name": "USDD", "symbol": "USDD"},
    {"id": "15", "name": "Dola", "symbol": "DOLA"},
    {"id": "16", "name": "Parrot USD", "symbol": "PAI"},
    {"id": "17", "name": "HUSD", "symbol": "HUSD"},
    {"id": "18", "name": "Nexus USD", "symbol": "NUSD"},
    {"id": "19", "name": "Gemini Dollar", "symbol": "GUSD"},
    {"id": "20", "name": "Alchemix USD", "symbol": "ALUSD"},
    {"id": "21", "name": "flexUSD", "symbol": "FLEXUSD"},
    {"id": "22", "name": "sUSD", "symbol": "SUSD"},
    {"id": "23", "name": "Origin Dollar", "symbol": "OUSD"},
    {"id": "24", "name": "Celo Dollar", "symbol": "CUSD"},
    {"id": "25", "name": "Reserve", "symbol": "RSV"},
    {"id": "26", "name": "mStable USD", "symbol": "MUSD"},
    {"id": "27", "name": "USDK", "symbol": "USDK"},
    {"id": "28", "name": "Vai", "symbol": "VAI"},
    {"id": "29", "name": "TOR", "symbol": "TOR"},
    {"id": "30", "name": "Dollar on Chain", "symbol": "DOC"},
    {"id": "31", "name": "SpiceUSD", "symbol": "USDS"},
    {"id": "32", "name": "Sperax USD", "symbol": "USDS"},
    {"id": "33", "name": "USDP Stablecoin", "symbol": "USDP"},
    {"id": "34", "name": "USD Balance", "symbol": "USDB"},
    {"id": "35", "name": "MAI", "symbol": "MAI"},
    {"id": "36", "name": "Ratio Stable Coin", "symbol": "USDR"},
    {"id": "37", "name": "USDJ", "symbol": "USDJ"},
    {"id": "38", "name": "STBL", "symbol": "STBL"},
    {"id": "39", "name": "VOLT Protocol", "symbol": "VOLT"},
    {"id": "40", "name": "Rai Reflex Index", "symbol": "RAI"},
]

BRIDGES = [
    {"name": "polygon", "id": 1, "displayName": "Polygon PoS Bridge"},
    {"name": "zksync", "id": 26, "displayName": "zkSync Era Bridge"},
    {"name": "stargate", "id": 12, "displayName": "Stargate"},
    {"name": "arbitrum", "id": 2, "displayName": "Arbitrum Bridge"},
    {"name": "across", "id": 19, "displayName": "Across"},
    {"name": "avalanche-btc", "id": 15, "displayName": "Core Bitcoin Bridge"},
    {"name": "portal", "id": 9, "displayName": "Portal by Wormhole"},
    {"name": "optimism", "id": 4, "displayName": "Optimism Gateway"},
    {"name": "polygon_zkevm", "id": 23, "displayName": "Polygon zkEVM Bridge"},
    {"name": "avalanche", "id": 3, "displayName": "Avalanche Bridge"},
    {"name": "meson", "id": 28, "displayName": "Meson"},
    {"name": "hop", "id": 13, "displayName": "Hop"},
    {"name": "rhinofi", "id": 39, "displayName": "rhino.fi"},
    {"name": "xdai", "id": 16, "displayName": "xDai Bridge"},
    {"name": "synapse", "id": 11, "displayName": "Synapse"},
    {"name": "squidrouter", "id": 32, "displayName": "Squid (Powered by Axelar)"},
    {"name": "axelarsatellite", "id": 34, "displayName": "Satellite (Powered by Axelar)"},
    {"name": "symbiosis", "id": 27, "displayName": "Symbiosis"},
    {"name": "celer", "id": 10, "displayName": "Celer cBridge"},
    {"name": "base", "id": 29, "displayName": "Base Bridge"},
    {"name": "manta", "id": 37, "displayName": "Manta Pacific Bridge"},
    {"name": "mantle", "id": 30, "displayName": "Mantle Bridge"},
    {"name": "allbridge", "id": 22, "displayName": "Allbridge Core"},
    {"name": "rainbowbridge", "id": 18, "displayName": "Rainbow Bridge"},
    {"name": "eywa", "id": 35, "displayName": "Eywa"},
    {"name": "multichain", "id": 5, "displayName": "Multichain"},
]

# Options DEXs are few enough to match locally without the model.
OPTIONS = [
    {"slug": "aevo", "name": "Aevo"},
    {"slug": "derive", "name": "Derive"},
    {"slug": "hegic", "name": "Hegic"},
    {"slug": "premia-v3", "name": "Premia V3"},
    {"slug": "stryke-clamm", "name": "Stryke CLAMM"},
    {"slug": "opyn-squeeth", "name": "Opyn Squeeth"},
    {"slug": "ribbon", "name": "Ribbon"},
    {"slug": "thetanuts-finance", "name": "Thetanuts Finance"},
    {"slug": "zeta-markets", "name": "Zeta Markets"},
    {"slug": "typus-finance", "name": "Typus Finance"},
    {"slug": "moby", "name": "Moby"},
    {"slug": "ithaca", "name": "Ithaca"},
    {"slug": "jones-dao", "name": "Jones DAO"},
    {"slug": "siren", "name": "Siren"},
    {"slug": "pods-finance", "name": "Pods Finance"},
]
