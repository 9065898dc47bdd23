"""Configuration constants for contract-deployer."""

# Extra gas added on top of the raw estimate for contract-creation transactions
DEPLOY_GAS_HEADROOM = 100_000

# Fixed solc invocation: binary + interface output, optimizer on, pinned EVM target
SOLC_EXECUTABLE = "solc"
SOLC_EVM_VERSION = "constantinople"
SOURCE_SUFFIX = ".sol"
BYTECODE_SUFFIX = ".bin"
INTERFACE_SUFFIX = ".abi"

# Environment variables (also read from a .env file)
ENV_PRIVATE_KEY = "PRIVATE_KEY"
ENV_CHAIN_ID = "CHAIN_ID"
ENV_EXPLORER_URL = "EXPLORER_URL"
ENV_RPC_PROVIDER = "RPC_PROVIDER"
ENV_UINT256_VALUE = "UINT256_VALUE"
ENV_RECEIPT_TIMEOUT = "RECEIPT_TIMEOUT"

# Methods exercised on every deployed contract
SETTER_METHOD = "setUint256"
GETTER_METHOD = "getUint256"

# Receipt polling (seconds)
DEFAULT_POLL_INTERVAL = 0.5
MAX_POLL_INTERVAL = 8.0
POLL_BACKOFF = 2.0

# HTTP timeout for a single JSON-RPC request (seconds)
RPC_REQUEST_TIMEOUT = 30

UINT256_MAX = 2**256 - 1
