import asyncio
import logging

from cost_report.core.database import async_session, init_db
from cost_report.core.exceptions import ResourceExistsError
from cost_report.schemas.provider import InputField, ProviderCreate
from cost_report.services.provider_store import ProviderStore

# Configure logging to print to stdout
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

N, T = "number", "text"

# (provider name, [(input name, label, type), ...])
STOCK_PROVIDERS = [
    ("Google Cloud Run", [
        ("vCPU_seconds", "vCPU Seconds", N),
        ("GiB_seconds", "GiB Seconds", N),
        ("Requests", "Requests", N),
        ("Region", "Region", T),
        ("Concurrency", "Concurrency", N),
    ]),
    ("Google Cloud Storage", [
        ("Storage_GB", "Storage (GB)", N),
        ("Data_transfer_out_GB", "Data Transfer Out (GB)", N),
        ("Operations_class_A", "Class A Operations", N),
        ("Operations_class_B", "Class B Operations", N),
        ("Region", "Region", T),
    ]),
    ("Google Cloud CDN", [
        ("Cache_egress_GB", "Cache Egress (GB)", N),
        ("HTTP_requests", "HTTP Requests", N),
        ("Region", "Region", T),
        ("Cache_fill_GB", "Cache Fill (GB)", N),
    ]),
    ("Google Cloud Load Balancing", [
        ("Forwarding_rules", "Forwarding Rules", N),
        ("Data_processed_GB", "Data Processed (GB)", N),
        ("Region", "Region", T),
        ("Load_balancer_type", "Load Balancer Type", T),
    ]),
    ("MongoDB Atlas", [
        ("Cluster_tier", "Cluster Tier", T),
        ("Storage_GB", "Storage (GB)", N),
        ("Data_transfer_out_GB", "Data Transfer Out (GB)", N),
        ("Region", "Region", T),
        ("Backup_usage", "Backup Usage", T),
    ]),
    ("Vercel", [
        ("Build_execution_minutes", "Build Execution Minutes", N),
        ("Bandwidth_GB", "Bandwidth (GB)", N),
        ("Serverless_invocations", "Serverless Invocations", N),
        ("Team_seats", "Team Seats", N),
        ("Plan_type", "Plan Type", T),
    ]),
    ("Ably", [
        ("Connection_hours", "Connection Hours", N),
        ("Messages", "Messages", N),
        ("Peak_connections", "Peak Connections", N),
        ("Channels", "Channels", N),
        ("Plan_type", "Plan Type", T),
    ]),
    ("Agora", [
        ("Audio_minutes", "Audio Minutes", N),
        ("Video_HD_minutes", "Video HD Minutes", N),
        ("Video_720p_minutes", "Video 720p Minutes", N),
        ("Users", "Users", N),
    ]),
    ("Mixpanel", [
        ("Events", "Events", N),
        ("User_profiles", "User Profiles", N),
        ("Reports", "Reports", N),
        ("Sessions", "Sessions", N),
        ("Plan_type", "Plan Type", T),
    ]),
    ("Segment", [
        ("MTUs", "MTUs", N),
        ("Connections", "Connections", N),
        ("Destinations", "Destinations", N),
        ("Users", "Users", N),
        ("Plan_type", "Plan Type", T),
    ]),
    ("Resend", [
        ("Emails_sent", "Emails Sent", N),
        ("Contacts", "Contacts", N),
        ("Domains", "Domains", N),
        ("API_calls", "API Calls", N),
    ]),
    ("ElevenLabs Speech to Text", [
        ("Audio_seconds", "Audio Seconds", N),
        ("Model_type", "Model Type", T),
        ("Language", "Language", T),
        ("API_calls", "API Calls", N),
    ]),
    ("OpenAI Whisper Text to Speech", [
        ("Characters_processed", "Characters Processed", N),
        ("Model_type", "Model Type", T),
        ("API_calls", "API Calls", N),
    ]),
    ("Unity Cloud", [
        ("Users", "Users", N),
        ("Storage_GB", "Storage (GB)", N),
        ("Build_numbers", "Build Minutes", N),
        ("Projects", "Projects", N),
    ]),
    ("Unreal Engine", [
        ("Custom_license", "Custom License", T),
        ("Users", "Users", N),
        ("Revenue_share", "Revenue Share", N),
        ("Projects", "Projects", N),
    ]),
    ("Suno AI", [
        ("Songs_generated", "Songs Generated", N),
        ("Credits", "Credits", N),
        ("Plan_type", "Plan Type", T),
    ]),
    ("Leonardo AI", [
        ("Image_generations", "Image Generations", N),
        ("Credits", "Credits", N),
        ("Model_type", "Model Type", T),
        ("Plan_type", "Plan Type", T),
    ]),
]


def stock_providers() -> list[ProviderCreate]:
    return [
        ProviderCreate(
            name=name,
            inputs=[InputField(name=n, label=label, type=t) for n, label, t in inputs],
        )
        for name, inputs in STOCK_PROVIDERS
    ]


async def seed_providers(store: ProviderStore) -> int:
    """Insert every stock provider that is not in the catalog yet"""
    created = 0
    for provider in stock_providers():
        try:
            await store.create(provider)
        except ResourceExistsError:
            logger.info(f"{provider.name} already exists, skipping")
            continue
        created += 1
    return created


async def main():
    logger.info("Initializing database tables...")
    await init_db()

    async with async_session() as session:
        created = await seed_providers(ProviderStore(session))
    logger.info(f"Inserted {created} of {len(STOCK_PROVIDERS)} stock providers")


if __name__ == "__main__":
    asyncio.run(main())
