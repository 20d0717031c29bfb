"""Fixed ABI of the deployed ``Pausable`` contracts (note ``unPause``)."""

PAUSABLE_ABI = [
    {
        "inputs": [],
        "name": "pause",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "unPause",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "paused",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "anonymous": False,
        "inputs": [{"indexed": False, "internalType": "address", "name": "account", "type": "address"}],
        "name": "Paused",
        "type": "event",
    },
    {
        "anonymous": False,
        "inputs": [{"indexed": False, "internalType": "address", "name": "account", "type": "address"}],
        "name": "Unpaused",
        "type": "event",
    },
]
