from pydantic import BaseModel, ConfigDict, Field


class EndpointDescription(BaseModel):
	path: str = Field(..., description='Request path')
	description: str = Field(..., description='What the endpoint returns')


class IndexResponse(BaseModel):
	name: str = Field(..., description='Service name')
	host: str = Field(..., description='Public base URL of the service')
	endpoints: list[EndpointDescription]

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'name': 'Dash Rates API',
				'host': 'https://rates.dash-retail.com',
				'endpoints': [{'path': '/USD', 'description': 'Price of 1 DASH in USD'}],
			}
		}
	)
