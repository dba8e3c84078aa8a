"""Function-template generator: HubSpot serverless function stub.

The output is fixed scaffolding showing how a card fetches its backing
record data. It does not depend on the layout, only on the fact that a
card exists, so every snapshot (including the empty one) yields the same text.
"""

from cardsmith.core import get_logger
from cardsmith.scene import Snapshot

logger = get_logger(__name__)

OBJECT_PROPERTIES: dict[str, tuple[tuple[str, ...], tuple[str, ...]]] = {
    # object type: (accepted type keys, properties fetched)
    "contacts": (("contact", "0-1"), ("firstname", "lastname", "email", "phone", "jobtitle", "company", "lifecyclestage")),
    "companies": (("company", "0-2"), ("name", "domain", "industry", "phone", "city", "state", "numberofemployees", "annualrevenue")),
    "deals": (("deal", "0-3"), ("dealname", "dealstage", "amount", "closedate", "pipeline", "hs_priority")),
    "tickets": (("ticket", "0-5"), ("subject", "content", "hs_ticket_priority", "hs_pipeline_stage", "hs_ticket_category")),
}

TEMPLATE_HEAD = """const hubspot = require('@hubspot/api-client');

/**
 * Serverless function backing a CRM card.
 *
 * Reads the record the card is shown on and returns its properties to the
 * UI extension. Deploy to: src/app/functions/fetchCardData.js
 */

exports.main = async (context = {}, sendResponse) => {
  try {
    const { objectId, objectType } = context.parameters || {};
    const { PRIVATE_APP_ACCESS_TOKEN } = process.env;

    const hubspotClient = new hubspot.Client({
      accessToken: PRIVATE_APP_ACCESS_TOKEN
    });

    let crmData = null;

    switch (objectType) {
"""

TEMPLATE_TAIL = """      default:
        throw new Error(`Unsupported object type: ${objectType}`);
    }

    sendResponse({
      statusCode: 200,
      body: {
        success: true,
        data: {
          crmData: crmData.properties,
          timestamp: new Date().toISOString()
        }
      }
    });
  } catch (error) {
    console.error('Error in serverless function:', error);

    sendResponse({
      statusCode: error.statusCode || 500,
      body: {
        success: false,
        error: error.message || 'Internal server error'
      }
    });
  }
};

/**
 * serverless.json
 *
 * {
 *   "runtime": "nodejs18.x",
 *   "version": "1.0",
 *   "environment": {
 *     "PRIVATE_APP_ACCESS_TOKEN": "@hs-private-app-secret"
 *   },
 *   "secrets": ["PRIVATE_APP_ACCESS_TOKEN"]
 * }
 */
"""


def _case_block(object_type: str, keys: tuple[str, ...], properties: tuple[str, ...]) -> str:
    lines = [f"      case '{key}':" for key in keys]
    lines.append(f"        crmData = await hubspotClient.crm.{object_type}.basicApi.getById(objectId, [")
    lines.append(",\n".join(f"          '{name}'" for name in properties))
    lines.append("        ]);")
    lines.append("        break;")
    return "\n".join(lines) + "\n\n"


FUNCTION_TEMPLATE = TEMPLATE_HEAD + "".join(
    _case_block(object_type, keys, properties)
    for object_type, (keys, properties) in OBJECT_PROPERTIES.items()
) + TEMPLATE_TAIL


def generate_function_template(snapshot: Snapshot) -> str:
    """Serverless data-fetching stub; identical for every snapshot."""
    logger.debug("function_template_generated", components=len(snapshot))
    return FUNCTION_TEMPLATE
