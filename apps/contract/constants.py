# -----------------------------
# ESCROW CONTRACT
# -----------------------------

# Order matches the contract's JobStatus enum
CHAIN_JOB_STATUSES = ["Open", "InProgress", "Completed", "Disputed", "Resolved"]

# How an on-chain status is mirrored into Job.status (None = leave as is)
CHAIN_TO_JOB_STATUS = {
    "Open": None,
    "InProgress": "in_progress",
    "Completed": "completed",
    "Disputed": "disputed",
    "Resolved": "completed",
}

# Only the functions the backend reads or the owner commands write.
# CONTRACT_ABI_PATH can point to the full artifact instead.
CONTRACT_ABI = [
    {
        "name": "jobs",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "", "type": "uint256"}],
        "outputs": [
            {"name": "client", "type": "address"},
            {"name": "freelancer", "type": "address"},
            {"name": "title", "type": "string"},
            {"name": "totalAmount", "type": "uint256"},
            {"name": "paidAmount", "type": "uint256"},
            {"name": "status", "type": "uint8"},
            {"name": "currentMilestone", "type": "uint256"},
            {"name": "resolution", "type": "uint8"},
            {"name": "deadline", "type": "uint256"},
            {"name": "disputeReason", "type": "string"},
            {"name": "disputeRaisedAt", "type": "uint256"},
        ],
    },
    {
        "name": "jobCounter",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "disputeResolvers",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "", "type": "address"}],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "name": "owner",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "address"}],
    },
    {
        "name": "assignDisputeResolver",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "resolver", "type": "address"},
            {"name": "status", "type": "bool"},
        ],
        "outputs": [],
    },
    {
        "name": "remainingFunds",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "jobId", "type": "uint256"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "commissionRate",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "platformFees",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "paused",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "bool"}],
    },
]
