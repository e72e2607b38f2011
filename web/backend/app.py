"""
MLFQ 스케줄러 시뮬레이터 - FastAPI 백엔드
"""

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import List, Optional, Dict
import asyncio
import json

from core.config import DEFAULT_NUM_LEVELS, DEFAULT_TIME_QUANTA, BOOST_INTERVAL
from core.process import Process
from schedulers.mlfq_scheduler import MLFQScheduler

app = FastAPI(
    title="MLFQ Scheduler Simulator",
    description="Multi-Level Feedback Queue 스케줄링 시뮬레이터",
    version="1.0.0"
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Pydantic 모델
class ProcessInput(BaseModel):
    pid: int
    priority: int = 0
    total_work: int = Field(gt=0)


class SimulationRequest(BaseModel):
    processes: List[ProcessInput]
    num_levels: int = DEFAULT_NUM_LEVELS
    time_quanta: List[int] = Field(default_factory=lambda: list(DEFAULT_TIME_QUANTA))
    boost_interval: int = BOOST_INTERVAL


class GanttEntry(BaseModel):
    pid: int
    start_time: int
    end_time: int
    level: int


class ProcessResult(BaseModel):
    pid: int
    initial_priority: int
    total_work: int
    start_time: Optional[int]
    finish_time: Optional[int]
    waiting_time: int
    turnaround_time: int
    response_time: Optional[int]


class SimulationResult(BaseModel):
    algorithm: str
    gantt_chart: List[GanttEntry]
    processes: List[ProcessResult]
    statistics: Dict[str, float]
    boost_times: List[int]
    event_log: List[str]


def create_process_objects(process_inputs: List[ProcessInput]) -> List[Process]:
    """ProcessInput을 Process 객체로 변환"""
    return [Process(pid=p.pid, priority=p.priority, remaining_time=p.total_work)
            for p in process_inputs]


def create_scheduler(request: SimulationRequest) -> MLFQScheduler:
    return MLFQScheduler(
        create_process_objects(request.processes),
        num_levels=request.num_levels,
        time_quanta=request.time_quanta,
        boost_interval=request.boost_interval
    )


def serialize_results(result: Dict) -> SimulationResult:
    """스케줄러 결과를 응답 모델로 변환"""
    return SimulationResult(
        algorithm=result['algorithm'],
        gantt_chart=[
            GanttEntry(pid=e.pid, start_time=e.start_time, end_time=e.end_time, level=e.level)
            for e in result['gantt_chart']
        ],
        processes=[
            ProcessResult(
                pid=p.pid,
                initial_priority=p.initial_priority,
                total_work=p.total_work,
                start_time=p.start_time,
                finish_time=p.finish_time,
                waiting_time=p.waiting_time,
                turnaround_time=p.turnaround_time,
                response_time=p.response_time
            )
            for p in result['processes']
        ],
        statistics=result['statistics'],
        boost_times=result['boost_times'],
        event_log=result['event_log']
    )


@app.get("/")
async def root():
    return {"message": "MLFQ Scheduler Simulator API", "version": "1.0.0"}


@app.get("/config")
async def get_config():
    """기본 설정 반환"""
    return {
        "num_levels": DEFAULT_NUM_LEVELS,
        "time_quanta": DEFAULT_TIME_QUANTA,
        "boost_interval": BOOST_INTERVAL
    }


@app.post("/simulate", response_model=SimulationResult)
async def simulate(request: SimulationRequest):
    """MLFQ 시뮬레이션 실행"""
    try:
        scheduler = create_scheduler(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return serialize_results(scheduler.run())


# WebSocket을 통한 실시간 시뮬레이션
class RealtimeSimulator:
    def __init__(self, request: SimulationRequest):
        self.scheduler = create_scheduler(request)
        self.is_complete = False
        self.last_gantt_index = 0
        self.last_log_index = 0

    def step(self) -> Dict:
        """한 스텝 실행 및 상태 반환"""
        if self.is_complete:
            return {'complete': True}

        is_complete = self.scheduler.execute_one_step()

        # 새로운 Gantt 엔트리
        new_gantt = [
            {'pid': e.pid, 'start_time': e.start_time, 'end_time': e.end_time, 'level': e.level}
            for e in self.scheduler.gantt_chart[self.last_gantt_index:]
        ]
        self.last_gantt_index = len(self.scheduler.gantt_chart)

        # 새로운 로그
        new_logs = self.scheduler.event_log[self.last_log_index:]
        self.last_log_index = len(self.scheduler.event_log)

        snapshot = self.scheduler.get_current_snapshot()
        stats = {
            'current_time': snapshot['time'],
            'context_switches': snapshot['context_switches'],
            'cpu_busy_time': snapshot['cpu_busy_time'],
            'boosts': snapshot['boosts'],
            'completed': len(snapshot['terminated']),
            'total': len(self.scheduler.processes)
        }

        if is_complete:
            self.is_complete = True
            self.scheduler.update_statistics()
            stats['final'] = self.scheduler.stats.calculate_averages()

        return {
            'complete': is_complete,
            'queues': snapshot['queues'],
            'new_gantt': new_gantt,
            'new_logs': new_logs,
            'stats': stats
        }


@app.websocket("/ws/realtime")
async def websocket_realtime(websocket: WebSocket):
    """실시간 시뮬레이션 WebSocket 엔드포인트"""
    await websocket.accept()
    simulator = None

    try:
        while True:
            data = await websocket.receive_text()

            try:
                message = json.loads(data)
                action = message.get('action')

                if action == 'init':
                    request = SimulationRequest(**message.get('request', {}))
                    simulator = RealtimeSimulator(request)
                    await websocket.send_json({
                        'type': 'initialized',
                        'algorithm': simulator.scheduler.name,
                        'process_count': len(request.processes)
                    })

                elif action == 'step':
                    if simulator:
                        await websocket.send_json({'type': 'step_result', **simulator.step()})

                elif action == 'run':
                    # 자동 실행 (속도 조절 가능)
                    if simulator:
                        speed = message.get('speed', 1.0)
                        if not isinstance(speed, (int, float)) or speed <= 0:
                            raise ValueError(f"speed must be positive, got {speed}")
                        delay = 1.0 / speed

                        while not simulator.is_complete:
                            result = simulator.step()
                            await websocket.send_json({'type': 'step_result', **result})
                            if result['complete']:
                                break
                            await asyncio.sleep(delay)

                else:
                    await websocket.send_json({'type': 'error', 'message': f"Unknown action: {action}"})

            except ValueError as e:
                await websocket.send_json({'type': 'error', 'message': str(e)})

    except WebSocketDisconnect:
        pass


@app.get("/sample-processes")
async def get_sample_processes():
    """샘플 프로세스 데이터 반환"""
    return {
        "samples": [
            {
                "name": "기본 테스트 (3개 프로세스)",
                "processes": [
                    {"pid": 1, "priority": 0, "total_work": 5},
                    {"pid": 2, "priority": 0, "total_work": 12},
                    {"pid": 3, "priority": 1, "total_work": 3}
                ]
            },
            {
                "name": "대화형 + 장기 작업 혼합",
                "processes": [
                    {"pid": 1, "priority": 0, "total_work": 1},
                    {"pid": 2, "priority": 0, "total_work": 2},
                    {"pid": 3, "priority": 0, "total_work": 80},
                    {"pid": 4, "priority": 0, "total_work": 120}
                ]
            },
            {
                "name": "부스트 관찰 (장기 작업)",
                "processes": [
                    {"pid": 1, "priority": 2, "total_work": 150},
                    {"pid": 2, "priority": 2, "total_work": 150},
                    {"pid": 3, "priority": 0, "total_work": 10}
                ]
            }
        ]
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
