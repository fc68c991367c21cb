"""
Built-in FiveM knowledge base.

A small set of reference entries covering core natives and the QBCore,
ESX and qb-target APIs, used to seed an empty store so that search is
useful before any user documentation has been uploaded.
"""

from typing import Any, Iterable

from loguru import logger

from ..config.models import IngestOptions
from ..entities.document import DocumentInput, DocumentMetadata
from ..entities.stats import IngestResult

SEED_OPTIONS = IngestOptions(chunk_size=800, chunk_overlap=100, batch_size=5)
USER_DOCUMENT_OPTIONS = IngestOptions(chunk_size=1000, chunk_overlap=200, batch_size=10)


def _doc(content: str, **metadata: str) -> DocumentInput:
    return DocumentInput(content=content.strip(), metadata=DocumentMetadata(**metadata))


FIVEM_KNOWLEDGE_BASE: list[DocumentInput] = [
    _doc(
        """
GetPlayerPed(playerId) -> Ped

Returns the ped handle for the specified player.

Parameters:
- playerId: The player ID (integer)

Returns:
- Ped: The ped handle (integer)

Example:
local playerPed = GetPlayerPed(PlayerId())
local coords = GetEntityCoords(playerPed)
""",
        source="fivem-natives",
        framework="fivem",
        type="native",
        title="GetPlayerPed",
        category="player",
    ),
    _doc(
        """
RegisterNetEvent(eventName, eventHandler)

Registers a network event handler that can receive data from server or client.

Parameters:
- eventName: The name of the event (string)
- eventHandler: The function to call when event is triggered

Security Note: Always validate the source and data parameters for security.

Example:
RegisterNetEvent('myresource:client:notify', function(message)
    print('Received message:', message)
end)
""",
        source="fivem-docs",
        framework="fivem",
        type="function",
        title="RegisterNetEvent",
        category="events",
    ),
    _doc(
        """
Wait(ms)

Pauses script execution for the specified number of milliseconds.

Parameters:
- ms: Milliseconds to wait (integer)

Performance Notes:
- Use Wait(0) sparingly as it can impact performance
- Prefer higher values like Wait(100) or Wait(1000) in loops
- Always include Wait() in while loops to prevent server freezing

Example:
CreateThread(function()
    while true do
        Wait(1000) -- Wait 1 second
        -- Your code here
    end
end)
""",
        source="fivem-performance",
        framework="fivem",
        type="function",
        title="Wait",
        category="performance",
    ),
    _doc(
        """
QBCore.Functions.GetPlayer(source) -> Player

Retrieves player data from the server using the player's server ID.

Parameters:
- source: Player server ID (integer)

Returns:
- Player: Player object containing all player information including job, money, items, etc.
- nil: If player not found

Example:
local Player = QBCore.Functions.GetPlayer(source)
if not Player then return end

local playerName = Player.PlayerData.name
local playerJob = Player.PlayerData.job.name
""",
        source="qbcore-docs",
        framework="qbcore",
        type="function",
        title="QBCore.Functions.GetPlayer",
        category="player",
    ),
    _doc(
        """
QBCore.Commands.Add(name, help, arguments, argsrequired, callback, permission)

Adds a new command to the QBCore command system.

Parameters:
- name: Command name (string)
- help: Help text (string)
- arguments: Array of argument definitions
- argsrequired: Whether arguments are required (boolean)
- callback: Function to execute (function)
- permission: Required permission level (string)

Example:
QBCore.Commands.Add('heal', 'Heal yourself', {}, false, function(source, args)
    local Player = QBCore.Functions.GetPlayer(source)
    if not Player then return end

    TriggerClientEvent('hospital:client:Revive', source)
end, 'admin')
""",
        source="qbcore-docs",
        framework="qbcore",
        type="function",
        title="QBCore.Commands.Add",
        category="commands",
    ),
    _doc(
        """
ESX.GetPlayerFromId(playerId) -> xPlayer

Gets the ESX player object from server ID.

Parameters:
- playerId: Player server ID (integer)

Returns:
- xPlayer: ESX player object with ESX-specific methods and properties
- nil: If player not found

Example:
local xPlayer = ESX.GetPlayerFromId(source)
if not xPlayer then return end

local playerName = xPlayer.getName()
local playerJob = xPlayer.getJob().name
local playerMoney = xPlayer.getMoney()
""",
        source="esx-docs",
        framework="esx",
        type="function",
        title="ESX.GetPlayerFromId",
        category="player",
    ),
    _doc(
        """
exports['qb-target']:AddBoxZone(name, center, length, width, options, targetoptions)

Creates an interaction zone using qb-target.

Parameters:
- name: Unique zone name (string)
- center: Zone center coordinates (vector3)
- length: Zone length (number)
- width: Zone width (number)
- options: Zone configuration options
- targetoptions: Target interaction options

Example:
exports['qb-target']:AddBoxZone("shop_zone", vector3(25.0, -1347.0, 29.5), 2.0, 2.0, {
    name = "shop_zone",
    heading = 0.0,
    debugPoly = false,
    minZ = 28.5,
    maxZ = 30.5,
}, {
    options = {
        {
            type = "client",
            event = "shop:client:open",
            icon = "fas fa-shopping-cart",
            label = "Open Shop",
        },
    },
    distance = 2.5
})
""",
        source="qb-target-docs",
        framework="qbcore",
        type="export",
        title="qb-target AddBoxZone",
        category="interaction",
    ),
]


async def initialize_knowledge_base(engine) -> IngestResult:
    """Replace the store contents with the built-in knowledge base.

    Args:
        engine: RAGEngine to seed

    Returns:
        Ingestion summary
    """
    logger.info("Initializing knowledge base...")
    await engine.clear()
    result = await engine.ingest_documents(FIVEM_KNOWLEDGE_BASE, SEED_OPTIONS)
    logger.info(
        f"Knowledge base initialized: processed={result.processed_documents}, "
        f"chunks={result.total_chunks}, failed={result.failed_documents}"
    )
    return result


async def add_user_documents(engine, documents: Iterable[DocumentInput | dict[str, Any]]) -> IngestResult:
    """Ingest user-supplied documentation with the default upload settings."""
    return await engine.ingest_documents(documents, USER_DOCUMENT_OPTIONS)
